"""
Configuration for the streamhist command line.

Example config (streamhist.yml):
    bins: 20
    width: 40
    field: ${STREAMHIST_FIELD}
"""

import os
import re
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, List, Optional

import yaml


class ConfigError(ValueError):
    """Configuration file is unreadable or invalid."""


def _substitute_env_vars(value: Any) -> Any:
    """Replace ``${VAR_NAME}`` with the environment variable, leaving unknown names as they are."""
    if isinstance(value, str):
        def replace(match):
            return os.environ.get(match.group(1), match.group(0))

        return re.sub(r'\$\{([^}]+)\}', replace, value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    return value


@dataclass
class HistConfig:
    """Defaults for the command line options."""
    bins: int = 10   # number of histogram bins
    width: int = 10  # width of the widest bar
    field: int = 1   # 1-based column of the input

    @classmethod
    def load(cls, path: Path) -> "HistConfig":
        """Load from YAML file with env var substitution."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(_substitute_env_vars(data))

    @classmethod
    def from_dict(cls, data: dict) -> "HistConfig":
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        try:
            return cls(**{k: int(v) for k, v in data.items()})
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Config values must be integers: {e}") from e

    def to_dict(self) -> dict:
        return asdict(self)

    def to_yaml(self) -> str:
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []
        if self.bins < 0:
            errors.append(f"Invalid number of bins: {self.bins}")
        if self.width < 0:
            errors.append(f"Invalid bar width: {self.width}")
        if self.field < 1:
            errors.append(f"Field index needs to start at 1, got {self.field}")
        return errors


def load_config(path: Optional[Path] = None) -> HistConfig:
    """Load config from an explicit file, or return defaults."""
    config = HistConfig() if path is None else HistConfig.load(path)

    errors = config.validate()
    if errors:
        raise ConfigError("; ".join(errors))
    return config
