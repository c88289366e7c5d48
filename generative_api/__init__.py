"""Client for a schema-constrained generative model endpoint."""
from .client import GEMINI_BASE_URL, GEMINI_MODEL, GenerativeClient
from .errors import ApiError, MalformedResponse

__all__ = ["ApiError", "GEMINI_BASE_URL", "GEMINI_MODEL", "GenerativeClient", "MalformedResponse"]
