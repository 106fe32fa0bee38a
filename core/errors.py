"""
Error taxonomy shared by the extraction pipeline, persistence layer and web API.

The web layer maps each class to an HTTP status in
``web.backend.exceptions``.
"""


class CareerGenieError(Exception):
    """Base class for all application errors."""
    pass


class DecodeError(CareerGenieError):
    """Raised when an uploaded file cannot be turned into text."""
    pass


class UnsupportedFormatError(DecodeError):
    """Raised when the decoder for a file format fails on the given bytes."""
    pass


class LLMExtractionError(CareerGenieError):
    """Raised when the LLM provider is unreachable or returns unusable content.

    The underlying exception is always chained via ``raise ... from``.
    """
    pass


class PersistenceError(CareerGenieError):
    """Raised when writing to the document or blob store fails."""
    pass


class ResumeNotFoundError(CareerGenieError):
    """Raised when a resume document does not exist."""
    pass


class ResumeAccessDeniedError(CareerGenieError):
    """Raised when a user operates on a resume owned by someone else."""
    pass
