class ScoringError(Exception):
    """Base exception for all scoring engine errors."""


class InvalidIndicatorShape(ScoringError):
    """Raised when a reading's value or reference range shape does not match its kind."""


class InsufficientHistoryError(ScoringError):
    """Raised when a trend is requested over fewer than two historical points."""


class InconsistentCategorySetError(ScoringError):
    """Raised when category breakdowns in a historical series carry different categories."""


class EmptyEntrySetError(ScoringError):
    """Raised when nutrition aggregation is asked to average zero entries."""
