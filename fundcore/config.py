"""
Funding configuration loading.

A config document carries the controller parameters and the initial
accumulator state:

    controller:
      k: "40000"        # gain divisor (UFixed6)
      max: "1.2"        # clamp bound (UFixed6)
    accumulator:
      value: "0.05"     # initial rate (Fixed6)
      skew: "0"         # initial skew (Fixed6)

Numbers are decimal strings or integers. Floats are rejected: YAML parses
``0.1`` as a binary float, which cannot be represented exactly. Every
malformed document, booleans and lists included, raises `ConfigError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Type, TypeVar

import yaml

from .number import Fixed6, FixedPoint, FixedPointError, UFixed6
from .pid import PAccumulator6, PController6

F = TypeVar("F", bound=FixedPoint)


class ConfigError(ValueError):
    """Raised when a funding config document is malformed."""


@dataclass(frozen=True)
class FundingConfig:
    controller: PController6
    initial: PAccumulator6 = PAccumulator6()


def _section(obj: Mapping[str, Any], name: str, required: bool = True) -> Mapping[str, Any]:
    sec = obj.get(name)
    if sec is None:
        if required:
            raise ConfigError(f"missing section {name!r}")
        return {}
    if not isinstance(sec, Mapping):
        raise ConfigError(f"section {name!r} must be a mapping")
    return sec


def _number(sec: Mapping[str, Any], section: str, key: str, cls: Type[F], default: F | None = None) -> F:
    if key not in sec:
        if default is None:
            raise ConfigError(f"missing {section}.{key}")
        return default
    raw = sec[key]
    if isinstance(raw, float):
        raise ConfigError(f"{section}.{key}: floats are not allowed, quote the value")
    try:
        return cls.parse(raw)
    except (TypeError, ValueError, FixedPointError) as exc:
        raise ConfigError(f"{section}.{key}: {exc}") from exc


def funding_config_from_dict(obj: Mapping[str, Any]) -> FundingConfig:
    if not isinstance(obj, Mapping):
        raise ConfigError("config must be a mapping")
    ctrl = _section(obj, "controller")
    acc = _section(obj, "accumulator", required=False)
    controller = PController6(
        k=_number(ctrl, "controller", "k", UFixed6),
        max=_number(ctrl, "controller", "max", UFixed6),
    )
    if controller.k.is_zero():
        raise ConfigError("controller.k must be nonzero")
    initial = PAccumulator6(
        value=_number(acc, "accumulator", "value", Fixed6, Fixed6.ZERO),
        skew=_number(acc, "accumulator", "skew", Fixed6, Fixed6.ZERO),
    )
    return FundingConfig(controller=controller, initial=initial)


def load_funding_config(path: Path | str) -> FundingConfig:
    try:
        obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(obj, Mapping):
        raise ConfigError("config YAML must be a mapping")
    return funding_config_from_dict(obj)
