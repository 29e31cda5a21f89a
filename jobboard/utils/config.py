"""
Configuration utilities.
"""
import os
from typing import Any, Callable, Dict, Optional
from dotenv import load_dotenv

ENV_PREFIX = "JOBBOARD_"

DEFAULTS = {
    "API_URL": "http://localhost:3000",
    "TIMEOUT": "10",
    "LOG_LEVEL": "INFO",
    "APPLICATIONS_PATH": "/api/applications",
    "FALLBACK_PATH": "/api/test-application",
    "USER_APPLICATIONS_PATH": "/api/user/applications",
    "SAVED_JOBS_PATH": "/api/user/saved-jobs",
}

class Config:
    """Configuration manager backed by ``JOBBOARD_*`` environment variables."""

    def __init__(self, env_file: Optional[str] = None, **overrides: Any):
        """Initialize configuration.

        Args:
            env_file: Optional path to a .env file. If None, a .env in the
                working directory is loaded when present.
            overrides: Values that take precedence over the environment,
                keyed like the variables without prefix (e.g. ``api_url``)
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()
        self._overrides = {key.upper(): value for key, value in overrides.items()}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        key = key.upper()
        if key in self._overrides:
            return self._overrides[key]
        value = os.getenv(ENV_PREFIX + key)
        if value is not None:
            return value
        if default is not None:
            return default
        return DEFAULTS.get(key)

    def get_credentials(self) -> Dict[str, Optional[str]]:
        """Get the bearer credential for authenticated endpoints."""
        return {"token": self.get("AUTH_TOKEN") or None}

    def token_provider(self) -> Callable[[], Optional[str]]:
        """Callable returning the configured bearer token, or None."""
        return lambda: self.get_credentials()["token"]

    @property
    def api_url(self) -> str:
        return str(self.get("API_URL")).rstrip("/")

    @property
    def timeout(self) -> float:
        return float(self.get("TIMEOUT"))

    @property
    def log_level(self) -> str:
        return str(self.get("LOG_LEVEL")).upper()

    @property
    def applications_path(self) -> str:
        return self.get("APPLICATIONS_PATH")

    @property
    def fallback_path(self) -> str:
        return self.get("FALLBACK_PATH")

    @property
    def user_applications_path(self) -> str:
        return self.get("USER_APPLICATIONS_PATH")

    @property
    def saved_jobs_path(self) -> str:
        return self.get("SAVED_JOBS_PATH")
