"""Pattern oracle contract and loader.

The oracle turns a step index plus profile scalars into raw vibration/suction
pattern and intensity values. Its algorithms live outside this package; we
only call it. Each of the four callables receives

    (step_index, intensity_start, intensity_mid, intensity_end,
     closeness_start, closeness_mid, closeness_end, channels, variety)

and returns a short sequence of integers, of which only the first is used.
An empty or None result counts as 0.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from easyg.program.errors import OracleUnavailable
from easyg.program.models import Channels, PreferenceRecord

logger = logging.getLogger(__name__)

ORACLE_FUNCTIONS = ("vibration_pattern", "vibration_intensity", "suction_pattern", "suction_intensity")


class PatternOracle(Protocol):
    def vibration_pattern(self, step_index: int, *profile: Any) -> Sequence[int] | None: ...

    def vibration_intensity(self, step_index: int, *profile: Any) -> Sequence[int] | None: ...

    def suction_pattern(self, step_index: int, *profile: Any) -> Sequence[int] | None: ...

    def suction_intensity(self, step_index: int, *profile: Any) -> Sequence[int] | None: ...


@dataclass(frozen=True, slots=True)
class RawPatterns:
    vibration_pattern: int
    vibration_intensity: int
    suction_pattern: int
    suction_intensity: int


def load_oracle(path: str) -> PatternOracle:
    """Import an oracle from "package.module" or "package.module:attr".

    A class is instantiated with no arguments; a module or any other object
    is used as-is. Raises OracleUnavailable when the import fails or the
    target lacks one of the four callables.
    """
    module_name, _, attr = path.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
        if attr:
            target = getattr(target, attr)
        if inspect.isclass(target):
            target = target()
    except Exception as exc:
        raise OracleUnavailable(f"Cannot load pattern oracle '{path}': {exc}") from exc

    missing = [name for name in ORACLE_FUNCTIONS if not callable(getattr(target, name, None))]
    if missing:
        raise OracleUnavailable(f"Pattern oracle '{path}' is missing: {', '.join(missing)}")

    logger.info("Loaded pattern oracle %s", path)
    return target


def _as_step_value(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def first_value(result: Any) -> int:
    """First element of an oracle result; empty/None gives 0.

    Steps carry integer set-points, so a non-integral value (3.7) is rejected
    with OracleUnavailable rather than rounded.
    """
    if result is None:
        return 0
    if isinstance(result, (list, tuple)):
        if not result:
            return 0
        head = result[0]
    else:
        head = result
    value = _as_step_value(head)
    if value is None:
        raise OracleUnavailable(f"Pattern oracle returned a non-integer result: {result!r}")
    return value


def query_oracle(
    oracle: PatternOracle,
    step_index: int,
    pref: PreferenceRecord,
    channels: Channels,
) -> RawPatterns:
    """Call all four oracle functions for one step. Any exception becomes OracleUnavailable."""
    ip, cp = pref.intensity_profile, pref.closeness_profile
    args = (step_index, ip.start, ip.mid, ip.end, cp.start, cp.mid, cp.end, channels, pref.variety_level)

    values: dict[str, int] = {}
    for name in ORACLE_FUNCTIONS:
        try:
            result = getattr(oracle, name)(*args)
        except Exception as exc:
            raise OracleUnavailable(f"Pattern oracle {name} failed at step {step_index}: {exc}") from exc
        values[name] = first_value(result)
    return RawPatterns(**values)
