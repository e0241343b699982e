"""Per-sample ADSR envelope generator."""

from __future__ import annotations

from .curve import curve
from .envelope import ADSR, GateEvent, Phase
from .params import ADSRParams, ParamKind, ParameterError

__all__ = ["ADSR", "ADSRParams", "GateEvent", "ParamKind", "ParameterError", "Phase", "curve"]
