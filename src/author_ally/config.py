from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class TipThresholds:
    """Cut-offs below which the analytics panel suggests an improvement."""

    readability: float = 60.0
    writing_pace: int = 10
    word_count: int = 500

    def __post_init__(self) -> None:
        for name in ("readability", "writing_pace", "word_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"tips.{name} must be a number, got {value!r}.")
            if value < 0:
                raise ValueError(f"tips.{name} must not be negative.")


@dataclass(slots=True)
class AuthorAllyConfig:
    """Configuration options for document analytics and writing tracking."""

    words_per_minute: int = 200
    count_spaces: bool = True
    store_backend: str = "json"
    store_path: str = "data/tracking"
    tips: TipThresholds = field(default_factory=TipThresholds)

    def __post_init__(self) -> None:
        wpm = self.words_per_minute
        if isinstance(wpm, bool) or not isinstance(wpm, int) or wpm <= 0:
            raise ValueError(f"words_per_minute must be a positive integer, got {wpm!r}.")

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(AuthorAllyConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "tips" in data:
        tips_value = data["tips"]
        if isinstance(tips_value, TipThresholds):
            kwargs["tips"] = tips_value
        elif isinstance(tips_value, Mapping):
            kwargs["tips"] = _build_tip_thresholds(tips_value)
        else:
            kwargs.pop("tips")
    return kwargs


def _build_tip_thresholds(data: Mapping[str, Any]) -> TipThresholds:
    tips_allowed = {field.name for field in fields(TipThresholds)}
    filtered = {key: data[key] for key in data if key in tips_allowed}
    return TipThresholds(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> AuthorAllyConfig:
    """Build an AuthorAllyConfig from a dictionary-like input."""
    if data is None:
        return AuthorAllyConfig()
    return AuthorAllyConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> AuthorAllyConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> AuthorAllyConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return AuthorAllyConfig()
    return config_from_yaml(path)
