"""Exception hierarchy for maintenance tracking."""


class UpkeepError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(UpkeepError):
    """Missing or invalid caller input. The message is shown to the user."""


class EvaluationError(UpkeepError):
    """The due-status evaluation could not be completed."""


class DataIntegrityError(EvaluationError):
    """Stored data or a rule definition is malformed."""


class StoreError(UpkeepError):
    """The logbook file could not be read or written."""
