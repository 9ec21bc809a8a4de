"""Tests for startup configuration validation."""

from pathlib import Path

import pytest

from inkwell.configs import LimiterConfig, Settings
from inkwell.errors import ConfigurationError


def build(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettings:
    """Tests for backend and provider combinations."""

    def test_memory_with_header_auth(self) -> None:
        """Test that memory storage with header auth is accepted."""
        config = build(STORAGE_BACKEND="memory", AUTH_PROVIDER="header")

        assert config.STORAGE_BACKEND == "memory"

    def test_postgres_requires_database_url(self) -> None:
        """Test that PostgreSQL storage requires DATABASE_URL."""
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            build(STORAGE_BACKEND="postgres", DATABASE_URL=None)

    def test_firestore_requires_project(self) -> None:
        """Test that Firestore storage requires FIREBASE_PROJECT_ID."""
        with pytest.raises(ConfigurationError, match="FIREBASE_PROJECT_ID"):
            build(STORAGE_BACKEND="firestore", AUTH_PROVIDER="header", FIREBASE_PROJECT_ID=None)

    def test_supabase_requires_url_and_key(self) -> None:
        """Test that Supabase auth requires its URL and key."""
        with pytest.raises(ConfigurationError) as exc_info:
            build(AUTH_PROVIDER="supabase", SUPABASE_URL=None, SUPABASE_SERVICE_KEY=None)

        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_SERVICE_KEY" in str(exc_info.value)

    def test_supabase_complete(self) -> None:
        """Test that a complete Supabase configuration is accepted."""
        config = build(
            AUTH_PROVIDER="supabase",
            SUPABASE_URL="https://project.supabase.co",
            SUPABASE_SERVICE_KEY="service-key",
        )

        assert config.SUPABASE_SERVICE_KEY is not None
        assert config.SUPABASE_SERVICE_KEY.get_secret_value() == "service-key"

    @pytest.mark.parametrize(
        ("backend", "provider"),
        [("memory", "firebase"), ("postgres", "header")],
    )
    def test_production_rejects_development_modes(self, backend: str, provider: str) -> None:
        """Test that production refuses development backends and providers."""
        with pytest.raises(ConfigurationError, match="not allowed in production"):
            build(
                ENVIRONMENT="production",
                STORAGE_BACKEND=backend,
                AUTH_PROVIDER=provider,
                DATABASE_URL="postgresql+asyncpg://u:p@db/inkwell",
                FIREBASE_PROJECT_ID="project",
            )

    def test_production_with_real_backends(self) -> None:
        """Test that production accepts real backends."""
        config = build(
            ENVIRONMENT="production",
            STORAGE_BACKEND="postgres",
            AUTH_PROVIDER="firebase",
            DATABASE_URL="postgresql+asyncpg://u:p@db/inkwell",
            FIREBASE_PROJECT_ID="project",
        )

        assert config.ENVIRONMENT == "production"

    def test_example_env_file_loads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a copy of .env.example is a valid development configuration."""
        for key in ("AUTH_PROVIDER", "FIREBASE_PROJECT_ID", "LEGACY_REGISTRATION"):
            monkeypatch.delenv(key, raising=False)

        config = Settings(_env_file=Path(__file__).parents[2] / ".env.example")

        assert config.ENVIRONMENT == "development"
        assert config.AUTH_PROVIDER == "header"
        assert config.STORAGE_BACKEND == "memory"
        assert config.LEGACY_REGISTRATION is True


class TestLimiterConfig:
    """Tests for the rate limiter settings."""

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that limiter settings come from prefixed variables."""
        monkeypatch.setenv("LIMITER_DEFAULT_LIMITS", '["5/minute"]')
        monkeypatch.setenv("LIMITER_ENABLED", "true")

        config = LimiterConfig()

        assert config.default_limits == ["5/minute"]
        assert config.enabled is True
