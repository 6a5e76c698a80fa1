"""Configuration defaults and environment variable mappings for rbridge.

Host-supplied interpreter properties take precedence over environment
variables, which take precedence over the defaults below.
"""

import os
import tempfile
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# ENVIRONMENT VARIABLES REFERENCE
# =============================================================================

# Rserve connection
# -----------------
# RBRIDGE_RSERVE_HOST: Rserve host (default: localhost)
# RBRIDGE_RSERVE_PORT: Rserve port (default: 6311)
#
# Rendering
# ---------
# RBRIDGE_TMP_DIR: Directory for per-call R Markdown documents and rendered
#   HTML (default: the platform temp directory)
#
# SparkR bootstrap
# ----------------
# RBRIDGE_SPARK_ENABLED: Try to load SparkR after connecting (default: true)
# RBRIDGE_SPARK_MASTER: Master passed to sparkR.init (default: local)
# RBRIDGE_SPARK_HOME_ENV: Name of the variable the R session reads to find
#   the Spark installation (default: SPARK_HOME)
#
# Logging
# -------
# RBRIDGE_LOG_LEVEL: Logging verbosity (default: INFO)
#   Values: DEBUG, INFO, WARNING, ERROR, CRITICAL

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================

DEFAULT_RSERVE_HOST = "localhost"
DEFAULT_RSERVE_PORT = 6311
DEFAULT_SPARK_ENABLED = True
DEFAULT_SPARK_MASTER = "local"
DEFAULT_SPARK_HOME_ENV = "SPARK_HOME"
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(raw: str, default: bool) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


class Config:
    """Environment-backed configuration lookups."""

    @staticmethod
    def get_rserve_host() -> str:
        return os.environ.get("RBRIDGE_RSERVE_HOST") or DEFAULT_RSERVE_HOST

    @staticmethod
    def get_rserve_port() -> int:
        raw = os.environ.get("RBRIDGE_RSERVE_PORT")
        if raw is None or raw.strip() == "":
            return DEFAULT_RSERVE_PORT
        try:
            return int(raw)
        except ValueError:
            return DEFAULT_RSERVE_PORT

    @staticmethod
    def get_tmp_dir() -> str:
        return os.environ.get("RBRIDGE_TMP_DIR") or tempfile.gettempdir()

    @staticmethod
    def get_spark_enabled() -> bool:
        raw = os.environ.get("RBRIDGE_SPARK_ENABLED")
        if raw is None:
            return DEFAULT_SPARK_ENABLED
        return _parse_bool(raw, DEFAULT_SPARK_ENABLED)

    @staticmethod
    def get_spark_master() -> str:
        return os.environ.get("RBRIDGE_SPARK_MASTER") or DEFAULT_SPARK_MASTER

    @staticmethod
    def get_spark_home_env() -> str:
        return os.environ.get("RBRIDGE_SPARK_HOME_ENV") or DEFAULT_SPARK_HOME_ENV

    @staticmethod
    def get_log_level() -> str:
        level = (os.environ.get("RBRIDGE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            return DEFAULT_LOG_LEVEL
        return level


# Host property names understood by RInterpreterSettings.from_properties
PROPERTY_KEYS: Dict[str, str] = {
    "rserve.host": "host",
    "rserve.port": "port",
    "rbridge.tmpdir": "tmp_dir",
    "spark.enabled": "spark_enabled",
    "spark.master": "spark_master",
    "spark.home.env": "spark_home_env",
}


class RInterpreterSettings(BaseModel):
    """Validated settings for one R interpreter instance."""

    host: str = Field(default_factory=Config.get_rserve_host)
    port: int = Field(default_factory=Config.get_rserve_port, ge=1, le=65535)
    tmp_dir: str = Field(default_factory=Config.get_tmp_dir)
    spark_enabled: bool = Field(default_factory=Config.get_spark_enabled)
    spark_master: str = Field(default_factory=Config.get_spark_master)
    spark_home_env: str = Field(default_factory=Config.get_spark_home_env)

    @field_validator("host", "spark_master", "spark_home_env")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("spark_enabled", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _parse_bool(value, DEFAULT_SPARK_ENABLED)
        return value

    @classmethod
    def from_properties(cls, properties: Optional[Mapping[str, Any]] = None) -> "RInterpreterSettings":
        """Build settings from host interpreter properties.

        Unknown property names are ignored; known ones override the
        environment and the defaults.
        """
        values: Dict[str, Any] = {}
        for key, value in (properties or {}).items():
            field_name = PROPERTY_KEYS.get(key)
            if field_name is not None and value is not None:
                values[field_name] = value
        return cls(**values)


def get_config_summary() -> dict:
    """Get a summary of current configuration from environment.

    Returns:
        Dictionary with current configuration values
    """
    return {
        "rserve_host": Config.get_rserve_host(),
        "rserve_port": Config.get_rserve_port(),
        "tmp_dir": Config.get_tmp_dir(),
        "spark_enabled": Config.get_spark_enabled(),
        "spark_master": Config.get_spark_master(),
        "spark_home_env": Config.get_spark_home_env(),
        "log_level": Config.get_log_level(),
    }
