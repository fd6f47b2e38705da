"""Recognizer configuration.

Template construction and query normalization must use identical settings,
so a recognizer owns exactly one RecognizerConfig. Settings can be loaded
from YAML:

    num_points: 64
    square_size: 250.0
    degenerate_policy: epsilon
    pass_threshold: 0.2
    confident_threshold: 0.65
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from stroke_engine.errors import ConfigError

DEGENERATE_REJECT = "reject"
DEGENERATE_EPSILON = "epsilon"
DEGENERATE_POLICIES = (DEGENERATE_REJECT, DEGENERATE_EPSILON)


@dataclass(frozen=True)
class RecognizerConfig:
    num_points: int = 64
    square_size: float = 250.0
    origin: tuple[float, float] = (0.0, 0.0)
    degenerate_policy: str = DEGENERATE_REJECT
    degenerate_epsilon: float = 1e-9
    pass_threshold: float = 0.2
    confident_threshold: float = 0.65

    def __post_init__(self):
        if int(self.num_points) != self.num_points or self.num_points < 2:
            raise ConfigError(f"num_points must be an integer >= 2, got {self.num_points!r}")
        if not self.square_size > 0:
            raise ConfigError(f"square_size must be positive, got {self.square_size!r}")
        if len(self.origin) != 2:
            raise ConfigError(f"origin must be an (x, y) pair, got {self.origin!r}")
        if self.degenerate_policy not in DEGENERATE_POLICIES:
            raise ConfigError(
                f"degenerate_policy must be one of {DEGENERATE_POLICIES}, "
                f"got {self.degenerate_policy!r}"
            )
        if not self.degenerate_epsilon > 0:
            raise ConfigError(
                f"degenerate_epsilon must be positive, got {self.degenerate_epsilon!r}"
            )
        if self.pass_threshold > self.confident_threshold:
            raise ConfigError("pass_threshold must not exceed confident_threshold")

        # Normalize types so YAML ints/lists behave like the defaults
        object.__setattr__(self, "num_points", int(self.num_points))
        object.__setattr__(self, "square_size", float(self.square_size))
        object.__setattr__(self, "origin", (float(self.origin[0]), float(self.origin[1])))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["origin"] = list(self.origin)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> RecognizerConfig:
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        if "origin" in data:
            data["origin"] = tuple(data["origin"])
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            if isinstance(e, ConfigError):
                raise
            raise ConfigError(str(e)) from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> RecognizerConfig:
        """Load settings from a YAML file. An empty file gives the defaults."""
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: invalid YAML: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        return cls.from_dict(data)

    def to_yaml(self, path: str | Path):
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
