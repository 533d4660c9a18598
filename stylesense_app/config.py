"""Configuration helpers for the StyleSense service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_DATABASE_PATH = "data/stylesense.db"


@dataclass
class StyleSenseConfig:
    """Configuration values for the stylist service.

    Generative calls have no built-in deadline on the client side, so a
    request timeout is always carried and passed to every model call.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    database_path: str = DEFAULT_DATABASE_PATH
    request_timeout_seconds: float = 30.0
    default_weather: str = "mild"
    trend_count: int = 5
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "StyleSenseConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that the API key can
        be injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLESENSE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = get_value("gemini_api_key") or get_value("google_api_key")

        return cls(
            api_key=api_key,
            model=str(get_value("model") or DEFAULT_GEMINI_MODEL),
            image_model=str(get_value("image_model") or DEFAULT_IMAGE_MODEL),
            database_path=str(get_value("database_path") or DEFAULT_DATABASE_PATH),
            request_timeout_seconds=float(get_value("request_timeout_seconds") or 30.0),
            default_weather=str(get_value("default_weather") or "mild"),
            trend_count=int(get_value("trend_count") or 5),
            host=str(get_value("host") or "0.0.0.0"),
            port=int(get_value("port") or 3000),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
