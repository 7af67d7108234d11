from shared.settings import API_KEY_PLACEHOLDER, Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "PORT",
        "MODEL",
        "GL_API_KEY",
        "GEMINI_API_KEY",
        "QUESTION_COUNT",
        "NODE_ENV",
        "APP_ENV",
        "APP_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.port == 3000
    assert s.model == "gemini-2.0-flash"
    assert s.question_count == 2
    assert s.gl_api_key == API_KEY_PLACEHOLDER
    assert s.api_key_configured is False
    assert s.cors_origins() == ["*"]


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("GL_API_KEY", "abc")
    monkeypatch.setenv("MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("QUESTION_COUNT", "5")
    s = Settings(_env_file=None)
    assert s.port == 4000
    assert s.api_key_configured is True
    assert s.model == "gemini-2.5-flash"
    assert s.question_count == 5


def test_production_restricts_cors_to_app_url(monkeypatch) -> None:
    monkeypatch.setenv("NODE_ENV", "production")
    monkeypatch.setenv("APP_URL", "https://quiz.example.com/")
    s = Settings(_env_file=None)
    assert s.cors_origins() == ["https://quiz.example.com"]


def test_development_ignores_app_url(monkeypatch) -> None:
    monkeypatch.setenv("NODE_ENV", "development")
    monkeypatch.setenv("APP_URL", "https://quiz.example.com")
    s = Settings(_env_file=None)
    assert s.cors_origins() == ["*"]
