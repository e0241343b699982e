"""Host-side helpers for driving an envelope from timed gate events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

from .diagnostics import log_event
from .envelope import ADSR, GateEvent, Phase
from .state import GATE_THRESHOLD, RAW_DTYPE


@dataclass(slots=True)
class GateSchedule:
    """Gate changes as ``(time_seconds, event)`` pairs in ascending time order."""

    events: List[Tuple[float, GateEvent]] = field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, GateEvent | str]]) -> "GateSchedule":
        events = []
        for time, event in pairs:
            time = float(time)
            if not time >= 0.0:
                raise ValueError(f"gate event time must be non-negative, got {time!r}")
            events.append((time, GateEvent(event)))
        # sorted() is stable, so simultaneous events keep their given order.
        events = sorted(events, key=lambda item: item[0])
        return cls(events=events)

    @classmethod
    def note(cls, note_off: float | None = None) -> "GateSchedule":
        """Note-on at zero, optionally followed by a note-off at ``note_off`` seconds."""

        pairs: list[tuple[float, GateEvent | str]] = [(0.0, GateEvent.NOTE_ON)]
        if note_off is not None:
            pairs.append((note_off, GateEvent.NOTE_OFF))
        return cls.from_pairs(pairs)

    def __len__(self) -> int:
        return len(self.events)


def gate_from_schedule(schedule: GateSchedule, frames: int, sample_rate: float) -> np.ndarray:
    """Expand ``schedule`` to a per-sample gate line (1.0 note-on, 0.0 note-off).

    Sample ``i`` carries the most recent event at or before ``i / sample_rate``;
    samples before the first event are note-off.
    """

    if frames < 0:
        raise ValueError("frames must be non-negative")
    if sample_rate <= 0.0:
        raise ValueError("sample_rate must be positive")
    gate = np.zeros(frames, dtype=RAW_DTYPE)
    if frames == 0 or not schedule.events:
        return gate
    times = np.arange(frames, dtype=RAW_DTYPE) / float(sample_rate)
    event_times = np.array([t for t, _ in schedule.events], dtype=RAW_DTYPE)
    levels = np.array(
        [1.0 if e is GateEvent.NOTE_ON else 0.0 for _, e in schedule.events], dtype=RAW_DTYPE
    )
    # Index of the last event with time <= sample time; -1 before the first one.
    idx = np.searchsorted(event_times, times, side="right") - 1
    active = idx >= 0
    gate[active] = levels[idx[active]]
    return gate


def render_schedule(
    envelope: ADSR, schedule: GateSchedule, seconds: float
) -> tuple[np.ndarray, list[Phase]]:
    """Render ``seconds`` of envelope (end sample inclusive) following ``schedule``.

    Returns the amplitude per sample and the phase the envelope reported for it.
    """

    if seconds < 0.0:
        raise ValueError("seconds must be non-negative")
    sr = envelope.sample_rate
    frames = int(seconds * sr) + 1
    gate = gate_from_schedule(schedule, frames, sr)

    values = np.empty(frames, dtype=RAW_DTYPE)
    phases: list[Phase] = []
    previous = None
    for i, level in enumerate(gate):
        event = GateEvent.NOTE_ON if level > GATE_THRESHOLD else GateEvent.NOTE_OFF
        if event is not previous:
            log_event(f"sample {i}: {event.value}")
            previous = event
        envelope.set_next_event(event)
        values[i] = envelope.generate()
        phases.append(envelope.phase)
    return values, phases


__all__ = ["GateSchedule", "gate_from_schedule", "render_schedule"]
