from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from glx.src.models.status import ColorMode
from glx.src.services.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/glx/config.yml")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

class Settings(BaseSettings):
    host: str = "https://gitlab.com"
    token: str = ""
    color: ColorMode = ColorMode.AUTO
    default_section: str = "step_script"
    request_timeout: float = 30.0
    per_page: int = 100
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    class Config:
        env_file = ".env"
        env_prefix = "GLX_"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Build settings from the environment, overridden by a YAML config file.
    An explicitly named file must exist; the default one is optional.
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise ConfigError(f"Can't open {path}")
    else:
        path = DEFAULT_CONFIG_PATH.expanduser()
        if not path.exists():
            try:
                return get_settings()
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration in the environment: {e}")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Can't open {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Can't read {path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Can't read {path}: configuration must be a mapping")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}")
