"""
Tests for settings loading.
"""

import pytest

from mediagen.config import Settings

KEYS = (
    "OPENAI_API_KEY", "OPENAI_BASE_URL", "IMAGE_MODEL", "VIDEO_MODEL", "LLM_TIMEOUT_SECONDS",
    "REDIS_URL", "JOB_TTL_SECONDS", "CORS_ALLOW_ORIGIN", "DEBUG",
)


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch also removes anything load_dotenv writes during the test
    for key in KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env, tmp_path):
        settings = Settings.from_env(str(tmp_path / "missing.env"))

        assert settings.openai_api_key is None
        assert settings.image_model == "gpt-image-1"
        assert settings.video_model == "sora-2"
        assert settings.llm_timeout_seconds == 600.0
        assert settings.job_ttl_seconds == 86400
        assert settings.cors_allow_origins == []
        assert settings.debug is False

    def test_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("CORS_ALLOW_ORIGIN", "http://localhost:5173, https://app.example.com ,")
        clean_env.setenv("JOB_TTL_SECONDS", "120")
        clean_env.setenv("DEBUG", "true")

        settings = Settings.from_env(str(tmp_path / "missing.env"))

        assert settings.openai_api_key == "sk-test"
        assert settings.cors_allow_origins == ["http://localhost:5173", "https://app.example.com"]
        assert settings.job_ttl_seconds == 120
        assert settings.debug is True

    def test_dotenv_does_not_override_environment(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# local overrides\n"
            "export IMAGE_MODEL='dall-e-3'\n"
            'VIDEO_MODEL="veo-3"\n'
            "REDIS_URL=redis://localhost:6379/0\n"
        )
        clean_env.setenv("VIDEO_MODEL", "from-env")

        settings = Settings.from_env(str(env_file))

        assert settings.image_model == "dall-e-3"
        assert settings.video_model == "from-env"
        assert settings.redis_url == "redis://localhost:6379/0"
