# lineparse/config.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from lineparse.numeric.state_parser import FIXED_FALSE_ARGS, FIXED_TRUE_ARGS, MAX_BASE, MIN_BASE
from lineparse.types import UNLIMITED, MatchMode, StyleName

_LOGGER = logging.getLogger("lineparse.config")

DEFAULT_DELIMITERS: tuple[str, ...] = (" ", "\t")


class TokenizerCfg(BaseModel):
    delimiters: list[str] = Field(default_factory=lambda: list(DEFAULT_DELIMITERS), description="literal split patterns")
    max_groups: int = Field(UNLIMITED, description="groups per line; <= 0 means unlimited")
    match_mode: MatchMode = "blend"  # blend: overlapping self-matches allowed

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @field_validator("delimiters")
    @classmethod
    def _default_when_empty(cls, v: list[str]) -> list[str]:
        return list(v) if v else list(DEFAULT_DELIMITERS)

    @field_validator("max_groups")
    @classmethod
    def _unlimited_when_non_positive(cls, v: int) -> int:
        return int(v) if v > 0 else UNLIMITED


class NumericCfg(BaseModel):
    format_style: StyleName = "SI"
    default_base: int = 10
    strict_separators: bool = True  # reject "1__000" and a second decimal point
    true_args: list[str] = []
    false_args: list[str] = []

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @field_validator("format_style", mode="before")
    @classmethod
    def _upper_style(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("default_base")
    @classmethod
    def _base_in_range(cls, v: int) -> int:
        if not (MIN_BASE <= v <= MAX_BASE):
            raise ValueError(f"default_base must be in [{MIN_BASE},{MAX_BASE}]")
        return int(v)

    @field_validator("true_args", "false_args")
    @classmethod
    def _lower_args(cls, v: list[str]) -> list[str]:
        return [str(a).lower() for a in v]


class Config(BaseModel):
    tokenizer: TokenizerCfg = Field(default_factory=TokenizerCfg)
    numeric: NumericCfg = Field(default_factory=NumericCfg)
    model_config = ConfigDict(extra="ignore")


def load_config(path: str | Path | None = "configs/default.yaml") -> Config:
    data: dict[str, Any] = {}
    if path:
        p = Path(path)
        if p.exists():
            try:
                with p.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise RuntimeError(f"Failed to parse YAML at {path}: {e}") from e
        else:
            _LOGGER.debug("config %s not found; using defaults", p)
    if not isinstance(data, dict):
        raise RuntimeError(f"Config at {path} must be a mapping, got {type(data).__name__}")
    return Config(**data)


def _cast_env_value(val: str, current: Any) -> Any:
    """
    Cast env string to the type of `current`.
    bool and int are strict; anything else stays a string.
    """
    if isinstance(current, bool):
        s = val.strip().lower()
        if s in ("1", "true", "yes", "y", "on"):
            return True
        if s in ("0", "false", "no", "n", "off"):
            return False
        raise ValueError(f"not a boolean: {val!r}")
    if isinstance(current, int):
        return int(val.strip())
    return val.strip()


_ENV_MAP: dict[str, tuple[str, str]] = {
    "LINEPARSE_MAX_GROUPS": ("tokenizer", "max_groups"),
    "LINEPARSE_MATCH_MODE": ("tokenizer", "match_mode"),
    "LINEPARSE_FORMAT_STYLE": ("numeric", "format_style"),
    "LINEPARSE_BASE": ("numeric", "default_base"),
    "LINEPARSE_STRICT_SEPARATORS": ("numeric", "strict_separators"),
}


def apply_env_overrides(cfg: Config, environ: dict[str, str] | None = None) -> None:
    """
    Override knobs from environment variables.
    Supported:
      LINEPARSE_MAX_GROUPS         groups per line (<= 0: unlimited)
      LINEPARSE_MATCH_MODE         blend | complete
      LINEPARSE_FORMAT_STYLE       SI | EU | EN
      LINEPARSE_BASE               default base for typed reads, 1..62
      LINEPARSE_STRICT_SEPARATORS  1/0, true/false, ...
    Bad values are logged and skipped.
    """
    env = os.environ if environ is None else environ
    for env_key, (section, field) in _ENV_MAP.items():
        raw = env.get(env_key)
        if raw is None:
            continue
        sect_obj = getattr(cfg, section)
        current = getattr(sect_obj, field)
        try:
            # validate_assignment re-runs the field validators
            setattr(sect_obj, field, _cast_env_value(raw, current))
        except ValueError as e:
            _LOGGER.warning("ignoring %s=%r: %s", env_key, raw, e)


def validate_config(cfg: Config) -> None:
    """
    Cross-field checks:
      - no token may be both true and false (fixed defaults included)
    Raises ValueError with the overlapping tokens.
    """
    trues = set(cfg.numeric.true_args) | FIXED_TRUE_ARGS
    falses = set(cfg.numeric.false_args) | FIXED_FALSE_ARGS
    both = sorted(trues & falses)
    if both:
        raise ValueError(f"Config invalid: tokens listed as both true and false: {both}")
