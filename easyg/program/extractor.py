"""Extract a PreferenceRecord from questionnaire answers using QUESTION_TAGS."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from easyg.program.models import Channels, OrderChoice, PhaseProfile, PreferenceRecord
from easyg.program.question_map import (
    ORDER_LABELS,
    PHASE_LABELS,
    PhaseLabels,
    matching_tags,
)


def _as_int(raw: Any) -> int | None:
    """Coerce an answer_id to int. Booleans and non-numeric values give None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    # Try to parse string-encoded numbers
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _as_pair(raw: Any) -> Channels | None:
    """Read an (internal, external) enablement pair such as [1, 0]."""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None
    internal, external = _as_int(raw[0]), _as_int(raw[1])
    if internal is None or external is None:
        return None
    return internal != 0, external != 0


def _as_order(raw: Any) -> OrderChoice | None:
    """Read the stimulation order label; accepts a bare string or a one-item list."""
    if isinstance(raw, (list, tuple)):
        if not raw:
            return None
        raw = raw[0]
        if isinstance(raw, dict):
            raw = raw.get("possible_answers")
    if not isinstance(raw, str):
        return None
    return ORDER_LABELS.get(raw.strip())


def _as_phases(raw: Any, current: PhaseProfile, labels: PhaseLabels) -> PhaseProfile:
    """Update `current` with any phase sub-answers found in `raw`."""
    if not isinstance(raw, (list, tuple)):
        return current
    profile = current
    for sub in raw:
        if not isinstance(sub, dict):
            continue
        label = sub.get("possible_answers")
        value = _as_int(sub.get("answer_id"))
        if value is None:
            continue
        if label == labels.start:
            profile = replace(profile, start=value)
        if label == labels.mid:
            profile = replace(profile, mid=value)
        if label == labels.end:
            profile = replace(profile, end=value)
    return profile


def extract_preferences(
    answers: list[Any],
    labels: PhaseLabels | None = None,
    tag_match: str = "contains",
) -> PreferenceRecord:
    """Build a PreferenceRecord from a flat list of answer dicts.

    Every field defaults to zero/False/None when its tag never matches.
    Malformed entries are skipped, and a later match overwrites an earlier one.
    Never raises.
    """
    labels = labels or PHASE_LABELS["v1"]
    values: dict[str, Any] = {}
    intensity = PhaseProfile()
    closeness = PhaseProfile()

    for entry in answers:
        if not isinstance(entry, dict):
            continue
        question = entry.get("question")
        if not isinstance(question, str):
            continue

        for qt in matching_tags(question, tag_match):
            if qt.kind == "pair":
                pair = _as_pair(entry.get("answer_id"))
                if pair is not None:
                    values[qt.field] = pair
            elif qt.kind == "order":
                values[qt.field] = _as_order(entry.get("answers"))
            elif qt.kind == "scalar":
                value = _as_int(entry.get("answer_id"))
                if value is not None:
                    values[qt.field] = value
            elif qt.kind == "phases":
                if qt.field == "intensity_profile":
                    intensity = _as_phases(entry.get("answers"), intensity, labels)
                else:
                    closeness = _as_phases(entry.get("answers"), closeness, labels)

    return PreferenceRecord(intensity_profile=intensity, closeness_profile=closeness, **values)
