# File: services/errors.py
from typing import Optional


class NotFoundError(Exception):
    """Raised when a requested experiment does not exist."""

    def __init__(self, message: str = "Experiment not found"):
        super().__init__(message)
        self.message = message


class BadRequestError(Exception):
    """Raised when a request is missing required input."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(Exception):
    """Raised when the generative API answers with a non-success status or cannot be reached."""

    def __init__(self, status: Optional[int], body: str):
        super().__init__(f"Gemini API error: {status} - {body}")
        self.status = status
        self.body = body


class UpstreamEmptyResponseError(Exception):
    """Raised when the generative API succeeds but returns no usable candidate."""

    def __init__(self, message: str = "No response generated from Gemini API"):
        super().__init__(message)


class CacheWriteError(Exception):
    """Returned (not raised) by the analysis cache when persisting a result fails."""

    def __init__(self, experiment_id: int, reason: str):
        super().__init__(f"Failed to cache analysis for experiment {experiment_id}: {reason}")
        self.experiment_id = experiment_id
        self.reason = reason


class SectionNotFoundError(Exception):
    """Raised when a named section is absent from a parsed analysis."""

    def __init__(self, section_name: str):
        super().__init__(f"{section_name} not found")
        self.section_name = section_name
        self.message = f"{section_name} not found"


class MLServiceError(Exception):
    """Raised when the external ML inference API fails."""
    pass
