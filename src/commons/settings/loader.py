"""Settings loader with hierarchical configuration support."""

import json
import os
from pathlib import Path
from typing import Any

from src.commons.settings.models import Settings

# Plain variable names used by the serverless deployment, mapped onto the
# nested settings tree. Prefixed variables win over these.
LEGACY_ENV_ALIASES: dict[str, tuple[str, ...]] = {
    "VIDEOS_BUCKET": ("blob_storage", "buckets", "videos"),
    "THUMBNAILS_BUCKET": ("blob_storage", "buckets", "thumbnails"),
    "VIDEOS_TABLE": ("document_db", "collections", "videos"),
    "AWS_REGION": ("blob_storage", "region"),
    "AWS_ACCESS_KEY_ID": ("blob_storage", "access_key"),
    "AWS_SECRET_ACCESS_KEY": ("blob_storage", "secret_key"),
    "API_GATEWAY_URL": ("client", "api_base_url"),
    "CLOUDFRONT_DOMAIN": ("client", "cdn_domain"),
}


class SettingsLoader:
    """Loads and merges configuration from multiple sources.

    Configuration precedence (highest to lowest):
    1. Prefixed environment variables (VIDEOSHARE__SECTION__KEY)
    2. Legacy plain environment variables (VIDEOS_BUCKET, VIDEOS_TABLE, ...)
    3. Environment-specific config (appsettings.{env}.json)
    4. Base config (appsettings.json)
    """

    ENV_PREFIX = "VIDEOSHARE__"

    def __init__(
        self,
        config_dir: Path | None = None,
        environment: str | None = None,
    ) -> None:
        """Initialize the settings loader.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to 'config' in current working directory.
            environment: Environment name (dev, staging, prod).
                        Defaults to VIDEOSHARE__APP__ENVIRONMENT or 'dev'.
        """
        self.config_dir = config_dir or Path("config")
        self.environment = environment or os.getenv(
            "VIDEOSHARE__APP__ENVIRONMENT", "dev"
        )

    def load(self) -> Settings:
        """Load settings with proper precedence.

        Returns:
            Fully resolved Settings instance.
        """
        config = self._load_json("appsettings.json")
        config = self._deep_merge(
            config, self._load_json(f"appsettings.{self.environment}.json")
        )
        config = self._deep_merge(config, self._load_legacy_env_vars())
        config = self._deep_merge(config, self._load_env_vars())
        return Settings(**config)

    def _load_legacy_env_vars(self) -> dict[str, Any]:
        """Map the recognised plain environment names onto the settings tree."""
        result: dict[str, Any] = {}
        for name, path in LEGACY_ENV_ALIASES.items():
            value = os.environ.get(name)
            if not value:
                continue
            current = result
            for part in path[:-1]:
                current = current.setdefault(part, {})
            current[path[-1]] = value
        return result

    def _load_env_vars(self) -> dict[str, Any]:
        """Load environment variables with the VIDEOSHARE__ prefix.

        Parses env vars like VIDEOSHARE__DOCUMENT_DB__HOST into nested dicts:
        {"document_db": {"host": "value"}}
        """
        result: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue

            key_path = key[len(self.ENV_PREFIX) :].lower().split("__")

            current = result
            for part in key_path[:-1]:
                current = current.setdefault(part, {})

            current[key_path[-1]] = self._coerce_value(value)

        return result

    def _coerce_value(self, value: str) -> Any:
        """Coerce string environment variable to appropriate type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        for cast in (int, float):
            try:
                return cast(value)
            except ValueError:
                pass

        # Lists/dicts such as CORS_ORIGINS
        if value.startswith(("[", "{")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _load_json(self, filename: str) -> dict[str, Any]:
        """Load JSON config file, or an empty dict if it doesn't exist."""
        path = self.config_dir / filename
        if path.exists():
            with path.open(encoding="utf-8") as f:
                return dict(json.load(f))
        return {}

    def _deep_merge(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Deep merge two dictionaries, values in override winning."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


_settings: Settings | None = None


def get_settings(
    config_dir: Path | None = None,
    environment: str | None = None,
    *,
    reload: bool = False,
) -> Settings:
    """Get or create the global settings instance.

    Args:
        config_dir: Optional config directory override.
        environment: Optional environment override.
        reload: Force reload settings from files.

    Returns:
        Settings instance.
    """
    global _settings  # noqa: PLW0603
    if _settings is None or reload:
        loader = SettingsLoader(config_dir=config_dir, environment=environment)
        _settings = loader.load()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance. Useful for testing."""
    global _settings  # noqa: PLW0603
    _settings = None
