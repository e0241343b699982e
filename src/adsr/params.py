"""Validated ADSR parameter set."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping

from .state import DEFAULT_PARAMS


class ParameterError(ValueError):
    """Raised when an envelope parameter falls outside its valid range."""


class ParamKind(Enum):
    ATTACK_TIME = "attack_time"
    DECAY_TIME = "decay_time"
    SUSTAIN_LEVEL = "sustain_level"
    RELEASE_TIME = "release_time"
    ATTACK_CURVE = "attack_curve"
    DECAY_CURVE = "decay_curve"
    RELEASE_CURVE = "release_curve"


# (low, high) bounds per kind; ``None`` means unbounded.
_RANGES: Dict[ParamKind, tuple[float, float | None]] = {
    ParamKind.ATTACK_TIME: (0.0, None),
    ParamKind.DECAY_TIME: (0.0, None),
    ParamKind.SUSTAIN_LEVEL: (0.0, 1.0),
    ParamKind.RELEASE_TIME: (0.0, None),
    ParamKind.ATTACK_CURVE: (-1.0, 1.0),
    ParamKind.DECAY_CURVE: (-1.0, 1.0),
    ParamKind.RELEASE_CURVE: (-1.0, 1.0),
}


def _coerce_kind(kind: ParamKind | str) -> ParamKind:
    if isinstance(kind, ParamKind):
        return kind
    try:
        return ParamKind(kind)
    except ValueError:
        raise ParameterError(f"unknown envelope parameter {kind!r}") from None


def _as_real(name: str, value: Any) -> float:
    # bool is an int subclass; a gate flag passed as a time is a caller bug.
    if isinstance(value, bool):
        raise ParameterError(f"{name} must be a real number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParameterError(f"{name} must be a real number, got {value!r}") from None
    if not math.isfinite(number):
        raise ParameterError(f"{name} must be finite, got {value!r}")
    return number


def validate_param(kind: ParamKind | str, value: Any) -> float:
    """Return ``value`` as a float if it lies in the range allowed for ``kind``.

    Raises :class:`ParameterError` naming the parameter and its range otherwise.
    """

    kind = _coerce_kind(kind)
    number = _as_real(kind.value, value)
    low, high = _RANGES[kind]
    if number < low or (high is not None and number > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise ParameterError(f"{kind.value} must be {bounds}, got {number!r}")
    return number


def validate_sample_rate(value: Any) -> float:
    rate = _as_real("sample_rate", value)
    if rate <= 0.0:
        raise ParameterError(f"sample_rate must be positive, got {rate!r}")
    return rate


@dataclass(slots=True)
class ADSRParams:
    """Times in seconds, sustain as a linear level, curve factors in [-1, 1]."""

    attack_time: float = DEFAULT_PARAMS["attack_time"]
    decay_time: float = DEFAULT_PARAMS["decay_time"]
    sustain_level: float = DEFAULT_PARAMS["sustain_level"]
    release_time: float = DEFAULT_PARAMS["release_time"]
    attack_curve: float = DEFAULT_PARAMS["attack_curve"]
    decay_curve: float = DEFAULT_PARAMS["decay_curve"]
    release_curve: float = DEFAULT_PARAMS["release_curve"]

    def __post_init__(self) -> None:
        for kind in ParamKind:
            setattr(self, kind.value, validate_param(kind, getattr(self, kind.value)))

    def get(self, kind: ParamKind | str) -> float:
        return getattr(self, _coerce_kind(kind).value)

    def set(self, kind: ParamKind | str, value: Any) -> float:
        """Validate and store ``value``; the set is unchanged if validation fails."""

        kind = _coerce_kind(kind)
        number = validate_param(kind, value)
        setattr(self, kind.value, number)
        return number

    def copy(self) -> "ADSRParams":
        return ADSRParams(**self.as_dict())

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ADSRParams":
        """Build a parameter set from ``data``, rejecting unknown keys."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ParameterError(f"unknown envelope parameter(s): {', '.join(unknown)}")
        return cls(**dict(data))


__all__ = [
    "ADSRParams",
    "ParamKind",
    "ParameterError",
    "validate_param",
    "validate_sample_rate",
]
