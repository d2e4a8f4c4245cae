"""
Application configuration.
"""

import json
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError


ENV_DATABASE_URL = "STUDENTSYSTEM_DATABASE_URL"
ENV_LOG_LEVEL = "STUDENTSYSTEM_LOG_LEVEL"


class AppConfig(BaseModel):
    """Settings fixed at startup."""
    database_url: str = Field("sqlite:///students.db", min_length=1)
    max_reconnect_attempts: int = Field(5, ge=1)
    reconnect_delay_ms: int = Field(1000, ge=0)
    lang_file: str = Field("lang.json", min_length=1)
    log_level: str = Field("INFO", pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                overrides: Optional[Mapping[str, Any]] = None) -> AppConfig:
    """Build the configuration from an optional JSON file, the environment and explicit overrides."""
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}
    
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read configuration file {path}: {str(e)}")
        
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
    
    if environ.get(ENV_DATABASE_URL):
        data["database_url"] = environ[ENV_DATABASE_URL]
    if environ.get(ENV_LOG_LEVEL):
        data["log_level"] = environ[ENV_LOG_LEVEL].upper()
    if overrides:
        data.update(overrides)
    
    try:
        return AppConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {str(e)}", details={"errors": e.errors()})
