"""Flask JSON API for single-vehicle maintenance tracking."""

from pathlib import Path

from flask import Flask, jsonify, request

# Add parent directory to path for package imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from upkeep import (
    DEFAULT_CATALOG,
    StoreError,
    UpkeepError,
    ValidationError,
    LogbookStore,
    load_catalog,
    rule_to_dict,
    submit_maintenance,
    query_due,
    list_log,
    delete_log,
    reset,
)
from upkeep.config import Config, configure_logging

app = Flask(__name__)

config = Config()
configure_logging(config.log_level)
app.config["DATA_FILE"] = config.data_file
app.config["CATALOG"] = load_catalog(config.catalog_file) if config.catalog_file else DEFAULT_CATALOG


def get_store() -> LogbookStore:
    """Store for the configured logbook file."""
    return LogbookStore(app.config["DATA_FILE"])


def json_body() -> dict:
    """Request JSON body; an empty or non-object body counts as {}."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    return jsonify({"success": False, "error": str(error)}), 400


@app.errorhandler(UpkeepError)
def handle_internal_error(error):
    app.logger.error("Request to %s failed: %s", request.path, error, exc_info=error)
    return jsonify({"success": False, "error": f"内部错误: {error}"}), 500


@app.route("/api/log", methods=["GET"])
def get_log():
    """All log entries, newest first."""
    return jsonify([e.to_api_dict() for e in list_log(get_store())])


@app.route("/api/log", methods=["POST"])
def post_log():
    """Record the purchase date and/or a batch of maintenance items."""
    body = json_body()
    try:
        result = submit_maintenance(
            get_store(),
            purchase_date=body.get("purchase_date"),
            maintenance_date=body.get("maintenance_date"),
            mileage=body.get("mileage"),
            items=body.get("items") if isinstance(body.get("items"), list) else None,
        )
    except StoreError as e:
        app.logger.error("Saving maintenance log failed: %s", e, exc_info=e)
        return jsonify({"success": False, "message": f"保存失败: {e}"}), 500

    return jsonify({
        "success": True,
        "message": "保养记录已成功保存！",
        "purchaseDateSet": result.purchase_date_set,
        "saved": [e.to_api_dict() for e in result.events],
    })


@app.route("/api/delete-log", methods=["POST"])
def post_delete_log():
    """Delete one log entry by id."""
    event_id = json_body().get("id")
    if not delete_log(get_store(), event_id):
        return jsonify({"success": False, "error": f"Log ID {event_id} not found"}), 404
    return jsonify({"success": True, "message": "记录已成功删除"})


@app.route("/api/car-info", methods=["DELETE"])
def delete_car_info():
    """Delete the purchase date together with every log entry."""
    reset(get_store())
    return jsonify({"success": True, "message": "购车日期及所有相关记录已删除。"})


@app.route("/api/query", methods=["POST"])
def post_query():
    """Due suggestions at the submitted current mileage."""
    body = json_body()
    result = query_due(get_store(), body.get("current_mileage"), catalog=app.config["CATALOG"])
    return jsonify(result.to_dict())


@app.route("/api/rules", methods=["GET"])
def get_rules():
    """The maintenance rule catalog, in order."""
    return jsonify([rule_to_dict(rule) for rule in app.config["CATALOG"]])


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
