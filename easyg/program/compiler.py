"""Program compiler — questionnaire answers in, 120-step actuation program out.

Pure: no I/O and no clock. Persisting the result is the caller's job and
happens only after compile_program returns.
"""

from __future__ import annotations

import logging
from typing import Any

from easyg.program.channels import resolve_channels
from easyg.program.errors import InvalidInput
from easyg.program.extractor import extract_preferences
from easyg.program.models import STEP_COUNT, Program
from easyg.program.oracle import PatternOracle
from easyg.program.question_map import PhaseLabels
from easyg.program.synthesizer import synthesize_step

logger = logging.getLogger(__name__)


def validate_request(device_id: Any, answers: Any) -> None:
    if not isinstance(device_id, str) or not device_id.strip():
        raise InvalidInput('Invalid input format. "mac_address" and "answers" are required.')
    if not isinstance(answers, list) or not answers:
        raise InvalidInput('Invalid input format. "mac_address" and "answers" are required.')


def compile_program(
    device_id: Any,
    answers: Any,
    oracle: PatternOracle,
    labels: PhaseLabels | None = None,
    tag_match: str = "contains",
) -> Program:
    """Compile answers into a Program of exactly STEP_COUNT steps.

    Raises InvalidInput before any computation when the device id or answers
    are missing, and OracleUnavailable when an oracle call fails.
    """
    validate_request(device_id, answers)

    pref = extract_preferences(answers, labels, tag_match)
    logger.debug("Preferences for %s: %s", device_id, pref)

    steps = []
    for i in range(STEP_COUNT):
        channels = resolve_channels(i, pref.channel_enabled, pref.stimulation_order)
        steps.append(synthesize_step(i, pref, channels, oracle))

    logger.info("Compiled %d-step program for %s", len(steps), device_id)
    return Program(device_id=device_id, steps=tuple(steps))
