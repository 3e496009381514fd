"""Service settings loaded from YAML and the environment."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from src.data_layer.exceptions import ConfigurationError


DEFAULT_SETTINGS_PATH = "config/nutrition.yaml"

USDA_BASE_URL = "https://api.nal.usda.gov/fdc/v1"
EDAMAM_BASE_URL = "https://api.edamam.com/api/food-database/v2"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the CLI and the API server."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )


@dataclass
class ServiceSettings:
    """Runtime configuration for the lookup chain.

    Credentials are optional: a provider without them answers from its
    static fallback table instead of failing.
    """

    usda_api_key: str = ""
    usda_base_url: str = USDA_BASE_URL
    edamam_app_id: str = ""
    edamam_api_key: str = ""
    edamam_base_url: str = EDAMAM_BASE_URL
    request_timeout_seconds: float = 10.0
    cache_ttl_seconds: float = 60 * 60
    rate_limit_max_requests: int = 30
    rate_limit_window_seconds: float = 60.0
    log_level: str = "INFO"

    @property
    def usda_configured(self) -> bool:
        return bool(self.usda_api_key.strip())

    @property
    def edamam_configured(self) -> bool:
        return bool(self.edamam_app_id.strip() and self.edamam_api_key.strip())


class SettingsLoader:
    """Loader for service settings.

    Values come from, in increasing precedence: dataclass defaults, the
    optional YAML file, and environment variables (USDA_API_KEY,
    EDAMAM_APP_ID, EDAMAM_API_KEY, NUTRITION_LOG_LEVEL).
    """

    def __init__(
        self,
        yaml_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        use_dotenv: bool = True,
    ):
        """Initialize settings loader.

        Args:
            yaml_path: Path to YAML settings file (missing file is allowed)
            environ: Environment mapping (defaults to os.environ)
            use_dotenv: Load a .env file into os.environ before reading it
        """
        self.yaml_path = Path(yaml_path or DEFAULT_SETTINGS_PATH)
        self._environ = environ
        self._use_dotenv = use_dotenv

    def load(self) -> ServiceSettings:
        """Load settings.

        Returns:
            ServiceSettings object

        Raises:
            ConfigurationError: If the YAML file exists but is malformed
        """
        if self._use_dotenv and self._environ is None:
            load_dotenv()
        environ = os.environ if self._environ is None else self._environ

        data = self._read_yaml()
        usda = self._section(data, "usda")
        edamam = self._section(data, "edamam")
        cache = self._section(data, "cache")
        rate_limit = self._section(data, "rate_limit")
        http = self._section(data, "http")
        logging_section = self._section(data, "logging")

        defaults = ServiceSettings()
        try:
            settings = ServiceSettings(
                usda_api_key=str(usda.get("api_key") or ""),
                usda_base_url=str(usda.get("base_url") or defaults.usda_base_url),
                edamam_app_id=str(edamam.get("app_id") or ""),
                edamam_api_key=str(edamam.get("api_key") or ""),
                edamam_base_url=str(edamam.get("base_url") or defaults.edamam_base_url),
                request_timeout_seconds=float(
                    http.get("timeout_seconds", defaults.request_timeout_seconds)
                ),
                cache_ttl_seconds=float(
                    cache.get("ttl_seconds", defaults.cache_ttl_seconds)
                ),
                rate_limit_max_requests=int(
                    rate_limit.get("max_requests", defaults.rate_limit_max_requests)
                ),
                rate_limit_window_seconds=float(
                    rate_limit.get("window_seconds", defaults.rate_limit_window_seconds)
                ),
                log_level=str(logging_section.get("level", defaults.log_level)).upper(),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(self.yaml_path), str(e)) from e

        # Environment wins over the file for secrets; blank values are unset
        settings.usda_api_key = (
            environ.get("USDA_API_KEY", "").strip() or settings.usda_api_key.strip()
        )
        settings.edamam_app_id = (
            environ.get("EDAMAM_APP_ID", "").strip() or settings.edamam_app_id.strip()
        )
        settings.edamam_api_key = (
            environ.get("EDAMAM_API_KEY", "").strip() or settings.edamam_api_key.strip()
        )
        settings.log_level = (environ.get("NUTRITION_LOG_LEVEL") or settings.log_level).upper()

        if settings.rate_limit_max_requests < 0:
            raise ConfigurationError(str(self.yaml_path), "rate_limit.max_requests must be >= 0")
        if settings.cache_ttl_seconds < 0:
            raise ConfigurationError(str(self.yaml_path), "cache.ttl_seconds must be >= 0")

        return settings

    def _read_yaml(self) -> Dict[str, Any]:
        if not self.yaml_path.exists():
            return {}

        try:
            with open(self.yaml_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(str(self.yaml_path), str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(str(self.yaml_path), "top level must be a mapping")
        return data

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(str(self.yaml_path), f"'{name}' must be a mapping")
        return section
