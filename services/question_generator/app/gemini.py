"""Gemini ``generateContent`` client for question generation.

One prompt goes out per topic, as the only content part of a single REST
call. The reply text is taken from ``candidates[0].content.parts[0].text``
and parsed with :func:`parse_model_json`. Nothing is retried or cached.

Failure mapping:
- transport errors and non-JSON reply bodies -> ``UpstreamError``
- an ``error`` object in the reply -> ``UpstreamError`` with its message
- no text at the expected path -> ``UpstreamError`` ("No content ...")
- text that is not JSON even after extraction -> ``FormatError``
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from shared.settings import Settings
from shared.tracing import estimate_tokens, span

from .errors import NO_CONTENT, UPSTREAM_ERROR, UpstreamError
from .parsing import parse_model_json
from .prompts import build_question_prompt


def _extract_text(payload: Any) -> Optional[str]:
    """Return ``candidates[0].content.parts[0].text`` or None."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _upstream_error_message(error: Any) -> str:
    if isinstance(error, dict) and "message" in error:
        return str(error["message"])
    return UPSTREAM_ERROR


class GeminiClient:
    """Thin async wrapper over the Gemini REST API."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        # Tests inject httpx.MockTransport here
        self._transport = transport

    @property
    def endpoint(self) -> str:
        s = self.settings
        return f"{s.api_base.rstrip('/')}/{s.model}:generateContent"

    def _timeout(self) -> httpx.Timeout:
        s = self.settings
        return httpx.Timeout(
            connect=s.upstream_connect_timeout,
            read=s.upstream_read_timeout,
            write=60,
            pool=10,
        )

    async def generate_content(self, prompt: str) -> Any:
        """POST the prompt and return the decoded reply body."""
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout(), transport=self._transport
            ) as client:
                r = await client.post(
                    self.endpoint,
                    params={"key": self.settings.gl_api_key},
                    json=body,
                )
                return r.json()
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from model API: {e}") from e

    async def generate_questions(self, topic: str) -> Any:
        """Generate the question set for ``topic`` and return it parsed."""
        prompt = build_question_prompt(topic, self.settings.question_count)
        with span(
            "gemini.generate_content",
            model=self.settings.model,
            prompt_tokens=estimate_tokens(prompt),
        ):
            payload = await self.generate_content(prompt)

        if isinstance(payload, dict) and payload.get("error"):
            raise UpstreamError(_upstream_error_message(payload["error"]))

        text = _extract_text(payload)
        if not text:
            raise UpstreamError(NO_CONTENT)

        return parse_model_json(text)
