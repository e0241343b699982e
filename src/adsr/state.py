"""Envelope defaults and constants."""

from __future__ import annotations

import os

# =========================
# Settings / fidelity
# =========================
RAW_DTYPE = "float64"
DEFAULT_SAMPLE_RATE = 44100

# Keeps the curve ratio strictly inside (0, 1) at curve factors of +/-1.
CURVE_EPSILON = 0.005

# Gate arrays are thresholded like the amp envelope kernels.
GATE_THRESHOLD = 0.5

# =========================
# Diagnostics
# =========================
EVENT_LOG_FILE = os.path.join("logs", "adsr_events.log")

# =========================
# Parameter defaults
# =========================
DEFAULT_PARAMS = {
    "attack_time": 0.01,
    "decay_time": 0.1,
    "sustain_level": 0.7,
    "release_time": 0.2,
    "attack_curve": 0.0,
    "decay_curve": 0.0,
    "release_curve": 0.0,
}


__all__ = [
    "RAW_DTYPE",
    "DEFAULT_SAMPLE_RATE",
    "CURVE_EPSILON",
    "GATE_THRESHOLD",
    "EVENT_LOG_FILE",
    "DEFAULT_PARAMS",
]
