"""Command line entry point for headless envelope renders."""

from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path
from typing import Sequence

import numpy as np

from .config import DEFAULT_CONFIG_PATH, EnvelopeConfig, load_configuration
from .diagnostics import enable_event_logging
from .envelope import ADSR, Phase
from .params import ParamKind, ParameterError, validate_sample_rate
from .render import GateSchedule, render_schedule

_PARAM_FLAGS = {
    "attack": ParamKind.ATTACK_TIME,
    "decay": ParamKind.DECAY_TIME,
    "sustain": ParamKind.SUSTAIN_LEVEL,
    "release": ParamKind.RELEASE_TIME,
    "attack_curve": ParamKind.ATTACK_CURVE,
    "decay_curve": ParamKind.DECAY_CURVE,
    "release_curve": ParamKind.RELEASE_CURVE,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an ADSR envelope to disk or a summary")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to configuration file")
    parser.add_argument("--attack", type=float, help="Attack time in seconds")
    parser.add_argument("--decay", type=float, help="Decay time in seconds")
    parser.add_argument("--sustain", type=float, help="Sustain level in [0, 1]")
    parser.add_argument("--release", type=float, help="Release time in seconds")
    parser.add_argument("--attack-curve", type=float, help="Attack curve factor in [-1, 1]")
    parser.add_argument("--decay-curve", type=float, help="Decay curve factor in [-1, 1]")
    parser.add_argument("--release-curve", type=float, help="Release curve factor in [-1, 1]")
    parser.add_argument("--sample-rate", type=float, help="Sample rate in Hz")
    parser.add_argument("--seconds", type=float, help="Length of the render in seconds")
    parser.add_argument(
        "--note-off",
        type=float,
        help="Replace the configured events with note-on at 0s and note-off at this time",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help=(
            "Optional path to write the rendered envelope. Paths ending in .csv"
            " receive index,time,value,phase rows; other suffixes receive raw"
            " float32 samples (little-endian)."
        ),
    )
    parser.add_argument(
        "--log-events",
        action="store_true",
        help="Append parameter and gate events to logs/adsr_events.log",
    )
    return parser


def _apply_overrides(config: EnvelopeConfig, args: argparse.Namespace) -> None:
    for attr, kind in _PARAM_FLAGS.items():
        value = getattr(args, attr)
        if value is not None:
            config.params.set(kind, value)
    if args.sample_rate is not None:
        config.sample_rate = validate_sample_rate(args.sample_rate)
    if args.seconds is not None:
        if not args.seconds >= 0.0:
            raise ValueError("--seconds must be non-negative")
        config.render.seconds = float(args.seconds)
    if args.note_off is not None:
        config.render.events = list(GateSchedule.note(args.note_off).events)


def _write_output(
    path: Path,
    values: np.ndarray,
    phases: list[Phase],
    envelope: ADSR,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    sr = envelope.sample_rate
    if path.suffix.lower() == ".csv":
        fmt, dtype = "csv", "float64"
        with path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(["index", "time", "value", "phase"])
            for i, (value, phase) in enumerate(zip(values, phases)):
                writer.writerow([i, f"{i / sr:.9g}", f"{float(value):.9g}", phase.value])
    else:
        fmt, dtype = "raw", "float32"
        np.asarray(values, dtype="<f4").tofile(path)

    metadata = {
        "frames": int(values.shape[0]),
        "sample_rate": sr,
        "format": fmt,
        "dtype": dtype,
        "params": envelope.params.as_dict(),
    }
    meta_path = path.with_suffix(path.suffix + ".json")
    meta_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_events:
        enable_event_logging(True)

    try:
        config = load_configuration(args.config)
        _apply_overrides(config, args)
        envelope = config.build()
        schedule = config.render.schedule()
    except (OSError, ParameterError, ValueError, TypeError, KeyError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    values, phases = render_schedule(envelope, schedule, config.render.seconds)
    peak = float(values.max()) if values.size else 0.0
    final = float(values[-1]) if values.size else 0.0
    print(
        f"Rendered {values.shape[0]} samples at {envelope.sample_rate:g} Hz "
        f"(peak {peak:.4f}, final {final:.4f})"
    )

    if args.output is not None:
        _write_output(args.output, values, phases, envelope)
        print(f"Wrote {args.output}")
    return 0


__all__ = ["main", "build_parser"]
