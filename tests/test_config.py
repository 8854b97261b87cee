"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from config import Config, load_config


class TestConfig:
    """Test configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BACKEND_URL", raising=False)
        monkeypatch.delenv("BACKEND_TIMEOUT_MS", raising=False)

        config = Config(_env_file=None)

        assert config.backend_url == "http://localhost:8080"
        assert config.backend_timeout_ms == 5000
        assert config.top_limit == 10

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("BACKEND_URL", "http://api.internal:9000")
        monkeypatch.setenv("BACKEND_TIMEOUT_MS", "750")

        config = load_config()

        assert config.backend_url == "http://api.internal:9000"
        assert config.backend_timeout_ms == 750

    def test_backend_config(self):
        backend = Config(backend_url="http://b.test", backend_timeout_ms=1200).backend()

        assert backend.base_url == "http://b.test"
        assert backend.timeout_seconds == 1.2

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(backend_timeout_ms=0)
