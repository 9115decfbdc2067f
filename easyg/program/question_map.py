"""
Questionnaire tag configuration.

Each entry maps a question tag (the short numeric identifier carried in the
`question` text of an answer) to:
  - field: the PreferenceRecord field it populates
  - kind: how the answer is read
      "pair"    -> answer_id is an (internal, external) pair of 0/1 flags
      "scalar"  -> answer_id is a single integer
      "phases"  -> answers is a list of {possible_answers, answer_id}, one per phase
      "order"   -> answers is the label of the stimulation order

Matching is by substring containment ("contains", the questionnaire app's
historical behaviour: tag "1" also matches "10", "12", ...) or by whole numeric
token ("exact").  Tags are evaluated in TAG_ORDER for every answer; a later
answer matching the same tag overwrites the earlier one.

Phase labels differ between questionnaire schema versions and are not
interchangeable:
  v1: Foreplay / Midway / End
  v2: Start / Midway / End
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from easyg.program.models import OrderChoice


@dataclass(frozen=True, slots=True)
class QuestionTag:
    tag: str
    field: str
    kind: str


QUESTION_TAGS: dict[str, QuestionTag] = {
    "6": QuestionTag(tag="6", field="channel_enabled", kind="pair"),
    "7": QuestionTag(tag="7", field="stimulation_order", kind="order"),
    "4": QuestionTag(tag="4", field="heat_level", kind="scalar"),
    "1": QuestionTag(tag="1", field="intensity_profile", kind="phases"),
    "2": QuestionTag(tag="2", field="closeness_profile", kind="phases"),
    "3": QuestionTag(tag="3", field="variety_level", kind="scalar"),
    "5": QuestionTag(tag="5", field="lubrication_level", kind="scalar"),
}

TAG_ORDER: tuple[str, ...] = ("6", "7", "4", "1", "2", "3", "5")


@dataclass(frozen=True, slots=True)
class PhaseLabels:
    start: str
    mid: str
    end: str


PHASE_LABELS: dict[str, PhaseLabels] = {
    "v1": PhaseLabels(start="Foreplay", mid="Midway", end="End"),
    "v2": PhaseLabels(start="Start", mid="Midway", end="End"),
}

ORDER_LABELS: dict[str, OrderChoice] = {
    "Start Vaginal then Clitoral": OrderChoice.internal_then_external,
    "Start Clitoral then Vaginal": OrderChoice.external_then_internal,
    "Combined all the way": OrderChoice.combined_from_start,
}

_TOKEN_RE = re.compile(r"\d+")


def get_phase_labels(schema_version: str) -> PhaseLabels | None:
    return PHASE_LABELS.get(schema_version)


def matching_tags(question: str, mode: str = "contains") -> list[QuestionTag]:
    """Return the tags a question text matches, in TAG_ORDER."""
    if mode == "exact":
        tokens = set(_TOKEN_RE.findall(question))
        return [QUESTION_TAGS[t] for t in TAG_ORDER if t in tokens]
    return [QUESTION_TAGS[t] for t in TAG_ORDER if t in question]
