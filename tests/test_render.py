import numpy as np
import pytest

from adsr.envelope import ADSR, GateEvent, Phase
from adsr.render import GateSchedule, gate_from_schedule, render_schedule


def test_schedule_sorts_pairs_and_converts_names():
    schedule = GateSchedule.from_pairs([(1.0, "note_off"), (0.0, "note_on")])
    assert schedule.events == [(0.0, GateEvent.NOTE_ON), (1.0, GateEvent.NOTE_OFF)]
    assert len(schedule) == 2


def test_schedule_rejects_negative_time():
    with pytest.raises(ValueError):
        GateSchedule.from_pairs([(-0.5, GateEvent.NOTE_ON)])


def test_note_helper_without_release():
    assert GateSchedule.note().events == [(0.0, GateEvent.NOTE_ON)]


def test_gate_from_schedule_holds_last_event():
    gate = gate_from_schedule(GateSchedule.note(0.05), 10, 100)
    np.testing.assert_array_equal(gate, [1, 1, 1, 1, 1, 0, 0, 0, 0, 0])


def test_gate_is_off_before_first_event():
    gate = gate_from_schedule(GateSchedule.from_pairs([(0.03, "note_on")]), 6, 100)
    np.testing.assert_array_equal(gate, [0, 0, 0, 1, 1, 1])


def test_empty_schedule_gives_closed_gate():
    gate = gate_from_schedule(GateSchedule(), 4, 100)
    assert gate.shape == (4,)
    assert not gate.any()


def test_gate_from_schedule_validates_arguments():
    with pytest.raises(ValueError):
        gate_from_schedule(GateSchedule(), -1, 100)
    with pytest.raises(ValueError):
        gate_from_schedule(GateSchedule(), 4, 0)


def test_render_schedule_typical():
    env = ADSR(0.2, 0.2, 0.8, 1.0, 100)
    values, phases = render_schedule(env, GateSchedule.note(1.0), 2.0)
    assert values.shape == (201,)
    assert len(phases) == 201
    assert phases[19] is Phase.ATTACK
    assert phases[20] is Phase.DECAY
    assert phases[40] is Phase.SUSTAIN
    assert phases[100] is Phase.RELEASE
    assert phases[200] is Phase.SILENCE
    assert values[100] == pytest.approx(0.8)
    assert values[200] == 0.0


def test_render_schedule_fade_in_out():
    env = ADSR(0.5, 0.0, 0.8, 0.5, 100)
    values, phases = render_schedule(env, GateSchedule.note(1.5), 2.0)
    assert values.max() == pytest.approx(0.8)
    assert phases[100] is Phase.SUSTAIN
    assert phases[150] is Phase.RELEASE
    assert values[-1] == 0.0


def test_render_schedule_rejects_negative_length():
    env = ADSR(0.1, 0.1, 0.5, 0.1, 100)
    with pytest.raises(ValueError):
        render_schedule(env, GateSchedule(), -1.0)
