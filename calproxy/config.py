"""Configuration for the calendar proxy."""

import os
from pathlib import Path
from urllib.parse import SplitResult, urlsplit

from pydantic import BaseModel, Field

from calproxy.exceptions import ConfigurationError

try:
    from dotenv import load_dotenv
except ImportError:
    load_dotenv = None


class ProxyConfig(BaseModel):
    """Proxy configuration with Pydantic validation."""

    # Upstream
    target: str | None = None
    auth_user: str = Field(default="")
    auth_pass: str = Field(default="")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Aggregation
    max_concurrent_fetches: int | None = Field(default=None, ge=1)
    fetch_timeout: float = Field(default=10.0, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)

    # Logging
    log_dir: Path = Field(default=Path("logs"))
    log_filename: str = Field(default="calproxy.log")

    def target_url(self) -> SplitResult:
        """Parse the configured upstream URL.

        Raises:
            ConfigurationError: If no target is set or it has no scheme/host
        """
        if not self.target:
            raise ConfigurationError("No upstream target configured (set TARGET)")
        url = urlsplit(self.target)
        if not url.scheme or not url.netloc:
            raise ConfigurationError(
                f"Upstream target must be an absolute URL: {self.target!r}"
            )
        return url

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        """Load configuration from environment variables and .env file."""
        # Load .env file if python-dotenv is available
        if load_dotenv is not None:
            load_dotenv()

        config_dict = {}

        # Upstream
        if "TARGET" in os.environ:
            config_dict["target"] = os.environ["TARGET"]
        if "AUTH_USER" in os.environ:
            config_dict["auth_user"] = os.environ["AUTH_USER"]
        if "AUTH_PASS" in os.environ:
            config_dict["auth_pass"] = os.environ["AUTH_PASS"]

        # Server: ADDR is host:port, PORT is "8080" or ":8080"
        if "ADDR" in os.environ:
            host, sep, port = os.environ["ADDR"].rpartition(":")
            if not sep:
                # Bare host, keep the default port
                host, port = port, ""
            if host:
                config_dict["host"] = host
            if port:
                _set_int(config_dict, "port", port)
        elif "PORT" in os.environ:
            _set_int(config_dict, "port", os.environ["PORT"].lstrip(":"))

        # Aggregation
        if "MAX_CONCURRENT_FETCHES" in os.environ:
            _set_int(
                config_dict,
                "max_concurrent_fetches",
                os.environ["MAX_CONCURRENT_FETCHES"],
            )
        for env_name, field in (
            ("FETCH_TIMEOUT", "fetch_timeout"),
            ("REQUEST_TIMEOUT", "request_timeout"),
        ):
            if env_name in os.environ:
                try:
                    config_dict[field] = float(os.environ[env_name])
                except ValueError:
                    pass  # Keep default if invalid

        # Logging
        if "LOG_DIR" in os.environ:
            config_dict["log_dir"] = Path(os.environ["LOG_DIR"])
        if "LOG_FILENAME" in os.environ:
            config_dict["log_filename"] = os.environ["LOG_FILENAME"]

        return cls(**config_dict)


def _set_int(config_dict: dict, field: str, value: str) -> None:
    try:
        config_dict[field] = int(value)
    except ValueError:
        pass  # Keep default if invalid
