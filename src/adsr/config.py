"""Configuration loading for envelope renders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Tuple

from .envelope import ADSR, GateEvent
from .params import ADSRParams, validate_sample_rate
from .render import GateSchedule
from .state import DEFAULT_SAMPLE_RATE

_REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = _REPO_ROOT / "configs" / "default.json"

DEFAULT_RENDER_SECONDS = 2.0


@dataclass(slots=True)
class RenderConfig:
    """Length of a headless render and the gate events that drive it."""

    seconds: float = DEFAULT_RENDER_SECONDS
    events: List[Tuple[float, GateEvent]] = field(default_factory=list)

    def schedule(self) -> GateSchedule:
        return GateSchedule.from_pairs(self.events)


@dataclass(slots=True)
class EnvelopeConfig:
    sample_rate: float
    params: ADSRParams
    render: RenderConfig = field(default_factory=RenderConfig)

    def build(self) -> ADSR:
        return ADSR.from_params(self.params, self.sample_rate)


def _normalise_render(data: Mapping[str, Any]) -> RenderConfig:
    seconds = float(data.get("seconds", DEFAULT_RENDER_SECONDS))
    if not seconds >= 0.0:
        raise ValueError("render.seconds must be non-negative")
    events = []
    for item in data.get("events", []) or []:
        if not isinstance(item, Mapping):
            raise TypeError("render.events[] entries must be objects with 'time' and 'event'")
        try:
            event = GateEvent(str(item["event"]))
        except ValueError:
            raise ValueError(
                f"render.events[].event must be 'note_on' or 'note_off', got {item['event']!r}"
            ) from None
        events.append((float(item.get("time", 0.0)), event))
    # Re-sort and validate times through the schedule builder.
    events = list(GateSchedule.from_pairs(events).events)
    return RenderConfig(seconds=seconds, events=events)


def parse_configuration(raw: Mapping[str, Any]) -> EnvelopeConfig:
    """Build an :class:`EnvelopeConfig` from an already-decoded mapping."""

    sample_rate = validate_sample_rate(raw.get("sample_rate", DEFAULT_SAMPLE_RATE))
    params = ADSRParams.from_mapping(dict(raw.get("envelope", {}) or {}))
    render = _normalise_render(dict(raw.get("render", {}) or {}))
    return EnvelopeConfig(sample_rate=sample_rate, params=params, render=render)


def load_configuration(path: str | Path) -> EnvelopeConfig:
    """Load an :class:`EnvelopeConfig` from ``path``."""

    with open(path, "r", encoding="utf8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, Mapping):
        raise TypeError("configuration root must be a JSON object")
    return parse_configuration(raw)


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_RENDER_SECONDS",
    "EnvelopeConfig",
    "RenderConfig",
    "load_configuration",
    "parse_configuration",
]
