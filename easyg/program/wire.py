"""
Firmware wire format.

A program is stored and served as an array of 120 records keyed "1".."10":

  "1"  step index (1-based)
  "2"  external temperature
  "3"  internal temperature
  "4"  vibration pattern
  "5"  vibration intensity
  "6"  suction pattern
  "7"  suction intensity
  "8"  external lubrication
  "9"  internal lubrication
  "10" reserved constant (5), emitted only when include_reserved is set

The key numbering is read by device firmware and must not change.
"""

from __future__ import annotations

from typing import Any

from easyg.program.models import Program, Step

WIRE_FIELDS: tuple[tuple[str, str], ...] = (
    ("1", "index"),
    ("2", "external_temp"),
    ("3", "internal_temp"),
    ("4", "vibration_pattern"),
    ("5", "vibration_intensity"),
    ("6", "suction_pattern"),
    ("7", "suction_intensity"),
    ("8", "external_lube"),
    ("9", "internal_lube"),
)
RESERVED_KEY = "10"

TEMPS_LUBRICATION_KEYS = ("3", "8", "9")
PATTERN_KEYS = ("4", "5", "6", "7")


def step_to_wire(step: Step, include_reserved: bool = True) -> dict[str, int]:
    record = {key: getattr(step, attr) for key, attr in WIRE_FIELDS}
    if include_reserved:
        record[RESERVED_KEY] = step.reserved
    return record


def program_to_wire(program: Program, include_reserved: bool = True) -> list[dict[str, int]]:
    return [step_to_wire(step, include_reserved) for step in program]


def temps_lubrication_view(wire: list[dict[str, Any]]) -> dict[str, Any]:
    """Internal temperature and both lubrication levels, taken from the first step."""
    first = wire[0] if wire else {}
    return {key: first.get(key) for key in TEMPS_LUBRICATION_KEYS}


def download_view(wire: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Temps/lubrication block followed by one pattern block per step."""
    blocks = [{key: item.get(key) for key in PATTERN_KEYS} for item in wire]
    return [temps_lubrication_view(wire), *blocks]
