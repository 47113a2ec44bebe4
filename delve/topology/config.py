import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigurationError

_ENV_PREFIX = "DELVE_"
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class GenerationConfig:
    branch_probability: float = 0.3
    max_branch_depth: int = 4
    max_branch_rooms: Optional[int] = None
    loop_probability: float = 0.1
    path_slack: int = 10
    max_attempts: int = 10
    enable_metrics: bool = True

    def __post_init__(self):
        for name in ("branch_probability", "loop_probability"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1] (was {value!r})")
        for name in ("max_branch_depth", "path_slack"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative integer (was {value!r})")
        if self.max_branch_rooms is not None and (
            isinstance(self.max_branch_rooms, bool) or not isinstance(self.max_branch_rooms, int) or self.max_branch_rooms < 0
        ):
            raise ConfigurationError(f"max_branch_rooms must be a non-negative integer or None (was {self.max_branch_rooms!r})")
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int) or self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1 (was {self.max_attempts!r})")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "GenerationConfig":
        """Build a config from DELVE_* variables, then apply keyword overrides.

        DELVE_ENABLE_GENERATION_METRICS maps to enable_metrics; every other
        field maps to DELVE_<FIELD_NAME>. An empty DELVE_MAX_BRANCH_ROOMS
        means unlimited.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = "DELVE_ENABLE_GENERATION_METRICS" if f.name == "enable_metrics" else _ENV_PREFIX + f.name.upper()
            if key not in env:
                continue
            raw = env[key].strip()
            if f.name == "enable_metrics":
                values[f.name] = raw.lower() not in _FALSE_VALUES
            elif f.name == "max_branch_rooms" and raw == "":
                values[f.name] = None
            else:
                values[f.name] = _parse_number(key, raw, float if "probability" in f.name else int)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _parse_number(key: str, raw: str, kind):
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a {kind.__name__} (was {raw!r})") from None


__all__ = ["GenerationConfig"]
