"""Custom error types for the paperhand system.

Only an empty normalization result is fatal inside the text core. Every other
degraded condition is returned to the caller as a warning string.
"""


class PaperhandError(Exception):
    """Base exception for all paperhand errors."""

    pass


class NormalizationError(PaperhandError):
    """Error while normalizing an extracted document."""

    pass


class NoTextExtractedError(NormalizationError):
    """Raised when no text survives normalization."""

    def __init__(self, message: str = "no text extracted"):
        super().__init__(message)


class PayloadError(PaperhandError):
    """Request payload could not be read or decoded."""

    pass
