"""Build one program Step from channels, oracle output and preferences.

Clamp/bucket rules:
  - vibration pattern, vibration intensity, suction pattern: min(value, 10)
  - suction intensity on patterns 2/3/4 is bucketed 1-3 -> 1, 4-6 -> 2,
    7-10 -> 3; anything else passes through
  - suction intensity ceiling is 3 on patterns 3/4 and 10 otherwise
    (pattern 2 is bucketed but keeps the 10 ceiling)
  - lubrication: min(level x channel flag, 10)
  - temperature: heat x channel flag, not clamped
"""

from __future__ import annotations

from easyg.program.models import RESERVED_VALUE, Channels, PreferenceRecord, Step
from easyg.program.oracle import PatternOracle, RawPatterns, query_oracle

PATTERN_MAX = 10
INTENSITY_MAX = 10
LUBE_MAX = 10

SUCTION_BUCKETED_PATTERNS = frozenset({2, 3, 4})

# (low, high, bucket), inclusive bounds
SUCTION_BUCKETS: tuple[tuple[int, int, int], ...] = (
    (1, 3, 1),
    (4, 6, 2),
    (7, 10, 3),
)

SUCTION_INTENSITY_CEILING: dict[int, int] = {
    3: 3,
    4: 3,
}


def bucket_suction_intensity(pattern: int, raw: int) -> int:
    if pattern not in SUCTION_BUCKETED_PATTERNS:
        return raw
    for low, high, bucket in SUCTION_BUCKETS:
        if low <= raw <= high:
            return bucket
    return raw


def suction_intensity(pattern: int, raw: int) -> int:
    """Bucket then clamp a raw suction intensity for the given (clamped) pattern."""
    ceiling = SUCTION_INTENSITY_CEILING.get(pattern, INTENSITY_MAX)
    return min(bucket_suction_intensity(pattern, raw), ceiling)


def build_step(step_index: int, pref: PreferenceRecord, channels: Channels, raw: RawPatterns) -> Step:
    """Assemble the Step for a 0-based index from already-queried oracle values."""
    internal = 1 if channels[0] else 0
    external = 1 if channels[1] else 0
    suction_pattern = min(raw.suction_pattern, PATTERN_MAX)

    return Step(
        index=step_index + 1,
        external_temp=pref.heat_level * external,
        internal_temp=pref.heat_level * internal,
        vibration_pattern=min(raw.vibration_pattern, PATTERN_MAX),
        vibration_intensity=min(raw.vibration_intensity, INTENSITY_MAX),
        suction_pattern=suction_pattern,
        suction_intensity=suction_intensity(suction_pattern, raw.suction_intensity),
        external_lube=min(pref.lubrication_level * external, LUBE_MAX),
        internal_lube=min(pref.lubrication_level * internal, LUBE_MAX),
        reserved=RESERVED_VALUE,
    )


def synthesize_step(
    step_index: int,
    pref: PreferenceRecord,
    channels: Channels,
    oracle: PatternOracle,
) -> Step:
    raw = query_oracle(oracle, step_index, pref, channels)
    return build_step(step_index, pref, channels, raw)
