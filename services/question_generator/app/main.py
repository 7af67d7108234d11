"""MD NEET-PG question generator service.

Generates NEET-PG / AIIMS / USMLE-level MCQs for a topic using Google
Gemini and relays the model's JSON to the caller. Nothing is stored.

Endpoints:
- GET `/`: plain-text liveness message.
- GET `/health`: JSON health probe.
- POST `/generate`: ``{"topic": str}`` -> ``{"success": true, "data": ...}``.

Errors are always ``{"error": str}``: 400 when the topic is missing or
empty (the model is not called), 500 for everything else.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from shared.models import ErrorResponse, GenerateRequest, GenerateResponse
from shared.settings import Settings
from shared.tracing import install_fastapi_tracing, log_event

from .errors import MISSING_TOPIC, GenerationError, ValidationError
from .gemini import GeminiClient

LIVENESS_MESSAGE = "🧠 MD NEET-PG Question Generator Backend is running!"

s = Settings()
gemini_client = GeminiClient(s)

app = FastAPI(title="MD NEET-PG Question Generator", version="1.0.0")
install_fastapi_tracing(app, service_name="question-generator")

app.add_middleware(
    CORSMiddleware,
    allow_origins=s.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(exc: GenerationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


# Malformed bodies and non-string topics count as "no topic".
@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(ValidationError(MISSING_TOPIC))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for any unhandled exception; return the error envelope."""
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.on_event("startup")
def _warn_missing_key() -> None:
    if not s.api_key_configured:
        print("⚠️ Warning: GL_API_KEY not set. Set it in your .env file.")
        log_event("Startup", {"api_key_configured": False, "model": s.model})


@app.get("/", response_class=PlainTextResponse)
def _root():
    return LIVENESS_MESSAGE


@app.get("/health")
def _health():
    return {"status": "ok"}


@app.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(request: GenerateRequest):
    """Generate MCQs for the requested topic."""
    topic = request.topic
    if not topic:
        return _error(ValidationError(MISSING_TOPIC))

    try:
        data = await gemini_client.generate_questions(topic)
    except GenerationError as exc:
        print(f"❌ Error generating questions: {exc.message}")
        log_event(
            "GenerationError",
            {"kind": exc.__class__.__name__, "error": exc.message[:300]},
        )
        return _error(exc)
    except Exception as exc:
        print(f"❌ Error generating questions: {exc}")
        log_event("GenerationError", {"kind": "unexpected", "error": str(exc)[:300]})
        return JSONResponse(status_code=500, content={"error": str(exc)})

    log_event("Generation", {"model": s.model})
    return GenerateResponse(data=data)


if __name__ == "__main__":
    import uvicorn

    print(f"✅ Backend running at: http://localhost:{s.port}")
    uvicorn.run(app, host=s.host, port=s.port)
