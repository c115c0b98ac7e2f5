import os
import yaml
from pathlib import Path
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError

class ToolsConfig(BaseModel):
    sc: str = "sc"
    wmic: str = "wmic"
    icacls: str = "icacls"

class AuditConfig(BaseModel):
    tools: ToolsConfig = ToolsConfig()
    # None keeps external queries blocking with no limit
    command_timeout: Optional[float] = None

    @field_validator("command_timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("command_timeout must be greater than zero")
        return value

def load_config_data(env_var: str, default_paths: List[Path]) -> Dict[str, Any]:
    """Helper to load config from env var or the first existing default path"""
    path = os.getenv(env_var)
    candidates = [Path(path)] if path else default_paths

    for p in candidates:
        if not p.exists():
            continue
        try:
            with open(p, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {p}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {p} must contain a mapping")
        return data
    return {}

def load_config() -> AuditConfig:
    # 1. SVCAUDIT_CONFIG, if set, is the only file considered
    # 2. otherwise config/svcaudit.yaml, then svcaudit.yaml in the working directory
    paths = [
        Path("config") / "svcaudit.yaml",
        Path("svcaudit.yaml"),
    ]
    data = load_config_data("SVCAUDIT_CONFIG", paths)
    try:
        return AuditConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
