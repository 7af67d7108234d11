"""Request tracing and event helpers with optional Langfuse integration.

By default every span is a no-op. When ``LANGFUSE_ENABLED=true``, the
``langfuse`` SDK is installed and a public/secret key pair is configured,
each HTTP request becomes a Langfuse trace and the spans opened while
serving it (the Gemini call, generation events) are attached to it.
Tracing problems are swallowed here and never change how a request is
answered.

Helpers:
- ``span``: context manager around the active tracer.
- ``log_event``: zero-duration span carrying a small structured payload.
- ``estimate_tokens``: rough prompt size for span metadata.
"""

import contextvars
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from shared.settings import Settings

_settings = Settings()

try:
    from langfuse import Langfuse  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    Langfuse = None  # type: ignore


def _now_ms() -> int:
    return int(time.time() * 1000)


class _Span:
    """Span that records nothing."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        self.attributes = dict(kwargs)

    def __enter__(self) -> "_Span":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


_current_trace = contextvars.ContextVar("qgen.current_trace", default=None)


class Tracer:
    """Tracer facade; Langfuse when configured, otherwise no-op spans."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        s = settings or _settings
        self._backend = s.tracing_backend.lower()
        self._enabled = bool(s.langfuse_enabled)
        self._trace_name = s.trace_name

        self._client = None
        if self._enabled and self._backend == "langfuse" and Langfuse is not None:
            try:
                if s.langfuse_public_key and s.langfuse_secret_key:
                    self._client = Langfuse(
                        public_key=s.langfuse_public_key,
                        secret_key=s.langfuse_secret_key,
                        host=s.langfuse_host or None,
                    )
            except Exception:
                self._client = None

    def start_trace(self, name: str, input: Optional[dict] = None):
        if self._client is None:
            return None
        try:
            tr = self._client.trace(name=name, input=input or {})
            _current_trace.set(tr)
            return tr
        except Exception:
            return None

    def end_trace(self, output: Optional[dict] = None) -> None:
        tr = _current_trace.get()
        if tr is not None and hasattr(tr, "update"):
            try:
                tr.update(output=output or {})
            except Exception:
                pass
        _current_trace.set(None)

    def start_span(self, name: str, **kwargs: Any) -> _Span:
        if self._client is None:
            return _Span(name, **kwargs)
        return _LangfuseSpan(
            self._client,
            name,
            parent_trace=_current_trace.get(),
            trace_name=self._trace_name,
            **kwargs,
        )


tracer = Tracer()


def install_fastapi_tracing(app, service_name: str) -> None:
    """Open one trace per HTTP request and close it with the status code."""
    from fastapi import Request

    @app.middleware("http")
    async def _trace_middleware(request: Request, call_next: Callable):
        # Method and path only; request bodies carry user topics.
        tracer.start_trace(
            name=f"{service_name} {request.method} {request.url.path}",
            input={"method": request.method, "path": request.url.path},
        )
        status = None
        try:
            with span("http.request"):
                response = await call_next(request)
            status = response.status_code
            return response
        finally:
            tracer.end_trace(output={"status": status})


@contextmanager
def span(name: str, **kwargs: Any) -> Iterator[_Span]:
    """Context manager wrapper around ``tracer.start_span``.

    Usage:
        with span("gemini.generate_content", model=model):
            ...

    An exception raised inside the block is recorded on the span and then
    re-raised unchanged.
    """
    s = tracer.start_span(name, **kwargs)
    s.__enter__()
    try:
        yield s
    except BaseException as exc:
        s.__exit__(type(exc), exc, exc.__traceback__)
        raise
    else:
        s.__exit__(None, None, None)


class _LangfuseSpan(_Span):  # pragma: no cover - optional dependency
    def __init__(
        self,
        client: Any,
        name: str,
        parent_trace: Any | None = None,
        trace_name: str = "trace",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, **kwargs)
        self._client = client
        self._trace = parent_trace
        self._trace_name = trace_name
        self._span = None
        self._start_ms = _now_ms()

    def __enter__(self) -> "_LangfuseSpan":
        try:
            # Spans opened outside a request still get a trace of their own
            if self._trace is None and hasattr(self._client, "trace"):
                self._trace = self._client.trace(name=self._trace_name)
            if self._trace is not None and hasattr(self._trace, "span"):
                self._span = self._trace.span(name=self.name, input=self.attributes)
        except Exception:
            self._trace = None
            self._span = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._span is not None and hasattr(self._span, "end"):
                self._span.end(
                    output={
                        "error": str(exc) if exc else None,
                        "duration_ms": max(1, _now_ms() - self._start_ms),
                    }
                )
        except Exception:
            pass


def log_event(name: str, payload: Optional[dict] = None) -> None:
    """Emit a short-lived structured event span.

    Args:
        name: Logical event name, e.g. "Generation" or "GenerationError".
        payload: Small JSON-serializable dict with event data.
    """
    with span(f"event.{name}", **dict(payload or {})):
        pass


def estimate_tokens(text: str) -> int:
    """Very rough subword token estimate (for span metadata only)."""
    if not text:
        return 0
    # ~4 characters per token for English-like text
    return max(1, int(len(text) / 4))
