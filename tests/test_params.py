import math

import pytest

from adsr.params import (
    ADSRParams,
    ParamKind,
    ParameterError,
    validate_param,
    validate_sample_rate,
)


def test_defaults_are_valid():
    params = ADSRParams()
    assert 0.0 <= params.sustain_level <= 1.0
    assert params.attack_curve == 0.0


def test_parameter_error_is_value_error():
    assert issubclass(ParameterError, ValueError)


@pytest.mark.parametrize(
    "kind, value",
    [
        (ParamKind.ATTACK_TIME, -0.1),
        (ParamKind.DECAY_TIME, -1e-9),
        (ParamKind.SUSTAIN_LEVEL, 1.01),
        (ParamKind.SUSTAIN_LEVEL, -0.01),
        (ParamKind.RELEASE_TIME, math.inf),
        (ParamKind.ATTACK_CURVE, 1.5),
        (ParamKind.DECAY_CURVE, -1.0001),
        (ParamKind.RELEASE_CURVE, math.nan),
    ],
)
def test_out_of_range_values_rejected(kind: ParamKind, value: float):
    with pytest.raises(ParameterError, match=kind.value):
        validate_param(kind, value)


@pytest.mark.parametrize(
    "kind, value",
    [
        (ParamKind.ATTACK_TIME, 0.0),
        (ParamKind.SUSTAIN_LEVEL, 0.0),
        (ParamKind.SUSTAIN_LEVEL, 1.0),
        (ParamKind.ATTACK_CURVE, -1.0),
        (ParamKind.RELEASE_CURVE, 1.0),
        (ParamKind.RELEASE_TIME, 3),
    ],
)
def test_boundary_values_accepted(kind: ParamKind, value: float):
    assert validate_param(kind, value) == float(value)


def test_non_numeric_values_rejected():
    with pytest.raises(ParameterError):
        validate_param(ParamKind.ATTACK_TIME, "fast")
    with pytest.raises(ParameterError):
        validate_param(ParamKind.ATTACK_TIME, None)
    with pytest.raises(ParameterError):
        validate_param(ParamKind.SUSTAIN_LEVEL, True)


def test_construction_rejects_invalid_field():
    with pytest.raises(ParameterError, match="sustain_level"):
        ADSRParams(sustain_level=2.0)


def test_failed_set_leaves_previous_value():
    params = ADSRParams(attack_time=0.3)
    with pytest.raises(ParameterError):
        params.set(ParamKind.ATTACK_TIME, -1.0)
    assert params.attack_time == 0.3


def test_set_accepts_kind_name():
    params = ADSRParams()
    assert params.set("release_curve", -0.25) == -0.25
    assert params.get(ParamKind.RELEASE_CURVE) == -0.25


def test_unknown_kind_rejected():
    params = ADSRParams()
    with pytest.raises(ParameterError, match="unknown"):
        params.set("hold_time", 0.1)


def test_copy_is_independent():
    params = ADSRParams(decay_time=0.4)
    clone = params.copy()
    clone.set(ParamKind.DECAY_TIME, 0.9)
    assert params.decay_time == 0.4
    assert clone.decay_time == 0.9


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ParameterError, match="hold_ms"):
        ADSRParams.from_mapping({"attack_time": 0.1, "hold_ms": 5})


def test_from_mapping_fills_defaults():
    params = ADSRParams.from_mapping({"sustain_level": 0.25})
    assert params.sustain_level == 0.25
    assert params.as_dict()["release_time"] == ADSRParams().release_time


@pytest.mark.parametrize("rate", [0, -44100, math.nan, "fast"])
def test_sample_rate_must_be_positive(rate):
    with pytest.raises(ParameterError):
        validate_sample_rate(rate)
