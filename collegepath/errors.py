"""
Domain error taxonomy.

Services raise these; ``main.create_app`` maps each one onto an HTTP response.
"""
from typing import Optional


class CollegePathError(Exception):
    """Base exception for CollegePath domain errors."""
    pass


class ValidationError(CollegePathError):
    """Malformed or missing required input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundOrUnauthorized(CollegePathError):
    """The record does not exist or belongs to someone else.

    Both cases share one message so callers cannot probe for other users' ids.
    """

    def __init__(self, resource: str = "Essay"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class FeedbackGenerationError(CollegePathError):
    """The language model call failed (network, non-2xx, unparseable body, timeout)."""
    pass


class ConcurrentEditConflict(CollegePathError):
    """Another save already claimed this version number."""

    def __init__(self, essay_id: str, version: int):
        super().__init__(f"Version {version} of essay {essay_id} already exists")
        self.essay_id = essay_id
        self.version = version


class DataIntegrityViolation(CollegePathError):
    """Stored data breaks an invariant (e.g. an essay with no versions)."""
    pass


class ConfigurationError(CollegePathError):
    """A required setting (such as an importer API key) is missing."""
    pass
