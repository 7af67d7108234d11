"""Failures the question generator reports to callers.

Each error carries the HTTP status the front door answers with and the
message placed in the ``{"error": ...}`` envelope. Only a bad request is
distinguished (400); anything that goes wrong after validation is a 500.
"""

from __future__ import annotations


class GenerationError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GenerationError):
    """Missing or empty topic."""

    status_code = 400


class UpstreamError(GenerationError):
    """Transport failure, upstream-reported error, or no text in the reply."""


class FormatError(GenerationError):
    """Model text is not JSON, even after brace extraction."""


MISSING_TOPIC = "Please provide a topic name."
NO_CONTENT = "No content returned from model."
NOT_JSON = "Model response not in JSON format."
UPSTREAM_ERROR = "Model API returned an error."
