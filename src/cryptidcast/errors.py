from __future__ import annotations

import httpx
from google.genai import errors as genai_errors


class CryptidcastError(RuntimeError):
    """Base class for failures surfaced to the studio."""


class ReadError(CryptidcastError):
    """Raised when an image resource cannot be read."""


class TransportError(CryptidcastError):
    """Raised when a remote endpoint cannot be reached or rejects the call."""


class EmptyResponse(CryptidcastError):
    """Raised when the script endpoint returns no text."""


class SchemaViolation(CryptidcastError):
    """Raised when the script reply is not JSON matching the script schema."""


class RemoteGenerationError(CryptidcastError):
    """Raised when the video job reports a failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingResult(CryptidcastError):
    """Raised when a finished video job carries no usable video."""


class GenerationTimeout(CryptidcastError):
    """Raised when a video job outlives the configured wait bound."""


class MissingCredentials(CryptidcastError):
    """Raised when no API key can be resolved."""


# Failures raised by the genai SDK or its HTTP layer when talking to the API.
TRANSPORT_FAILURES = (genai_errors.APIError, httpx.HTTPError)
