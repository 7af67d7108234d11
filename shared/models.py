"""Pydantic envelopes for the question generator API.

Only the outer request/response shapes are modelled. The question set
returned by the model is relayed as-is under ``data``; its fields
(``topic``, ``questions[].serial``, ``options`` A-D, ``correct_answer``,
``explanation``) are requested in the prompt but never validated.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Request body for ``POST /generate``.

    ``topic`` is optional at the schema level so that a missing topic is
    reported with the service's own 400 message instead of a 422.
    """

    topic: Optional[str] = Field(
        default=None, description="Subject to write questions about"
    )


class GenerateResponse(BaseModel):
    """Success envelope: the parsed model output under ``data``."""

    success: Literal[True] = True
    data: Any = Field(..., description="Question set exactly as parsed")


class ErrorResponse(BaseModel):
    """Failure envelope used for every non-2xx answer."""

    error: str
