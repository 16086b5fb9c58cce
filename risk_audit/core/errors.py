"""Error taxonomy for the audit engine and its collaborators."""


class AuditEngineError(Exception):
    """Base class for audit engine errors."""


class ScenarioResolutionError(AuditEngineError):
    """Raised when a category has no scenario, even in the default set.

    This is a catalog defect and is never recovered from.
    """


class ScoreComputationError(AuditEngineError):
    """A scoring function produced an unusable value.

    Never raised to callers: the scorer substitutes the midpoint and logs this.
    """

    def __init__(self, category: str, axis: str, value: object):
        self.category = category
        self.axis = axis
        self.value = value
        super().__init__(f"{category}: unusable {axis} value {value!r}")


class AugmentationUnavailable(AuditEngineError):
    """The generative narrative service timed out, failed, or is not configured."""


class PersistenceUnavailable(AuditEngineError):
    """The lead store is not configured."""


class RevenueParseError(ValueError):
    """Revenue text could not be turned into a number."""
