"""Per-sample ADSR envelope state machine."""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np

from .curve import curve
from .diagnostics import log_event
from .params import ADSRParams, ParamKind, ParameterError, validate_sample_rate
from .state import GATE_THRESHOLD, RAW_DTYPE


class GateEvent(Enum):
    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"


class Phase(Enum):
    ATTACK = "attack"
    DECAY = "decay"
    SUSTAIN = "sustain"
    RELEASE = "release"
    SILENCE = "silence"


class ADSR:
    """Attack/Decay/Sustain/Release envelope advanced one sample per call.

    The host stores the gate for the coming sample with :meth:`set_next_event`
    and pulls the amplitude with :meth:`generate`.  The stored gate persists
    until it is changed, so a held note only needs ``set_next_event`` at its
    edges.  Parameters may be changed between any two samples.
    """

    def __init__(
        self,
        attack_time: float,
        decay_time: float,
        sustain_level: float,
        release_time: float,
        sample_rate: float,
        *,
        attack_curve: float = 0.0,
        decay_curve: float = 0.0,
        release_curve: float = 0.0,
    ) -> None:
        # Validate everything before touching self so a rejected
        # construction never leaves a half-built envelope behind.
        params = ADSRParams(
            attack_time=attack_time,
            decay_time=decay_time,
            sustain_level=sustain_level,
            release_time=release_time,
            attack_curve=attack_curve,
            decay_curve=decay_curve,
            release_curve=release_curve,
        )
        rate = validate_sample_rate(sample_rate)
        self._params = params
        self._sample_rate = rate
        self._next_event = GateEvent.NOTE_OFF
        self.reset()

    @classmethod
    def from_params(cls, params: ADSRParams, sample_rate: float) -> "ADSR":
        return cls(sample_rate=sample_rate, **params.as_dict())

    # ---- state ----
    def reset(self) -> None:
        """Return to silence with both duration counters cleared."""

        self._note_on_frames = 0
        self._note_off_frames = 0
        self._value = 0.0
        self._last_gate_val = 0.0
        self._event = GateEvent.NOTE_OFF
        self._phase = Phase.SILENCE
        self._next_event = GateEvent.NOTE_OFF

    @property
    def params(self) -> ADSRParams:
        return self._params.copy()

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def event(self) -> GateEvent:
        return self._event

    @property
    def value(self) -> float:
        return self._value

    @property
    def last_gate_val(self) -> float:
        return self._last_gate_val

    @property
    def note_on_duration(self) -> int:
        return self._note_on_frames

    @property
    def note_off_duration(self) -> int:
        return self._note_off_frames

    @property
    def finished(self) -> bool:
        """True once the gate is off and the release has fully decayed."""
        return self._event is GateEvent.NOTE_OFF and self._phase is Phase.SILENCE

    # ---- control ----
    def set_next_event(self, event: GateEvent | str) -> None:
        self._next_event = GateEvent(event)

    def set_param(self, kind: ParamKind | str, value: Any) -> float:
        """Update one parameter, effective from the next sample.

        Raises :class:`ParameterError` and keeps the previous value when
        ``value`` is outside the range allowed for ``kind``.
        """

        try:
            number = self._params.set(kind, value)
        except ParameterError as exc:
            log_event(f"set_param rejected: {exc}")
            raise
        log_event(f"set_param {ParamKind(kind).value}={number!r}")
        return number

    # ---- internals ----
    def _seconds(self, frames: int) -> float:
        return frames / self._sample_rate

    def _phase_for(self, event: GateEvent) -> Phase:
        p = self._params
        if event is GateEvent.NOTE_ON:
            t = self._seconds(self._note_on_frames)
            if t < p.attack_time:
                return Phase.ATTACK
            if t < p.attack_time + p.decay_time:
                return Phase.DECAY
            return Phase.SUSTAIN
        t = self._seconds(self._note_off_frames)
        if t < p.release_time:
            return Phase.RELEASE
        return Phase.SILENCE

    def _value_for(self, phase: Phase) -> float:
        p = self._params
        if phase is Phase.ATTACK:
            t = self._seconds(self._note_on_frames)
            # Without a decay segment the attack lands directly on sustain.
            ceiling = 1.0 if p.decay_time > 0.0 else p.sustain_level
            return curve(t, ceiling, p.attack_time, p.attack_curve)
        if phase is Phase.DECAY:
            t = self._seconds(self._note_on_frames) - p.attack_time
            return (
                curve(p.decay_time - t, 1.0 - p.sustain_level, p.decay_time, p.decay_curve)
                + p.sustain_level
            )
        if phase is Phase.SUSTAIN:
            return p.sustain_level
        if phase is Phase.RELEASE:
            t = self._seconds(self._note_off_frames)
            return curve(p.release_time - t, self._last_gate_val, p.release_time, p.release_curve)
        return 0.0

    # ---- render ----
    def generate(self) -> float:
        """Advance one sample and return the new amplitude."""

        event = self._next_event
        if event is GateEvent.NOTE_ON:
            if self._event is GateEvent.NOTE_OFF:
                self._note_on_frames = 0
                self._note_off_frames = 0
        elif self._event is GateEvent.NOTE_ON:
            self._last_gate_val = self._value

        phase = self._phase_for(event)
        value = self._value_for(phase)

        # Counters stop once the phase can no longer advance.
        if event is GateEvent.NOTE_ON:
            if phase is not Phase.SUSTAIN:
                self._note_on_frames += 1
        elif phase is not Phase.SILENCE:
            self._note_off_frames += 1

        self._event = event
        self._phase = phase
        self._value = value
        return value

    def process(self, gate) -> np.ndarray:
        """Render one sample per entry of a 1-D gate array (> 0.5 is note-on)."""

        gate = np.asarray(gate, dtype=RAW_DTYPE)
        if gate.ndim != 1:
            raise ValueError(f"gate must be one-dimensional, got shape {gate.shape}")
        out = np.empty(gate.shape[0], dtype=RAW_DTYPE)
        for i, on in enumerate(gate > GATE_THRESHOLD):
            self._next_event = GateEvent.NOTE_ON if on else GateEvent.NOTE_OFF
            out[i] = self.generate()
        return out

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(phase={self._phase.value}, value={self._value:.6f}, "
            f"sample_rate={self._sample_rate:g})"
        )


__all__ = ["ADSR", "GateEvent", "Phase"]
