import os

# Deterministic, offline-friendly tests
os.environ.setdefault("LANGFUSE_ENABLED", "0")
os.environ.setdefault("GL_API_KEY", "test-key")
os.environ.setdefault("MODEL", "gemini-2.0-flash")
os.environ.setdefault("QUESTION_COUNT", "2")
