"""Tests for step synthesis: clamps, suction buckets, lube and temperature."""

import pytest

from easyg.program.models import PreferenceRecord
from easyg.program.oracle import RawPatterns
from easyg.program.synthesizer import (
    build_step,
    bucket_suction_intensity,
    suction_intensity,
    synthesize_step,
)

from tests.conftest import FakeOracle


def _raw(vp=1, vi=5, sp=1, si=5) -> RawPatterns:
    return RawPatterns(vibration_pattern=vp, vibration_intensity=vi, suction_pattern=sp, suction_intensity=si)


class TestSuctionBuckets:
    @pytest.mark.parametrize("raw, expected", [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (10, 3)])
    def test_bucketed_patterns(self, raw, expected):
        for pattern in (2, 3, 4):
            assert bucket_suction_intensity(pattern, raw) == expected

    @pytest.mark.parametrize("raw", [0, 11, 15, -1])
    def test_out_of_range_passes_through(self, raw):
        assert bucket_suction_intensity(3, raw) == raw

    def test_other_patterns_not_bucketed(self):
        assert bucket_suction_intensity(1, 9) == 9
        assert bucket_suction_intensity(5, 9) == 9

    def test_pattern_4_raw_9(self):
        assert suction_intensity(4, 9) == 3

    def test_pattern_3_caps_at_3(self):
        assert suction_intensity(3, 12) == 3

    def test_pattern_2_keeps_ceiling_10(self):
        assert suction_intensity(2, 9) == 3
        assert suction_intensity(2, 12) == 10

    def test_plain_pattern_caps_at_10(self):
        assert suction_intensity(1, 14) == 10
        assert suction_intensity(1, 0) == 0


class TestBuildStep:
    def test_index_and_reserved(self):
        step = build_step(0, PreferenceRecord(), (False, False), _raw())
        assert step.index == 1
        assert step.reserved == 5

    def test_clamps(self):
        step = build_step(5, PreferenceRecord(), (True, True), _raw(vp=14, vi=30, sp=12, si=9))
        assert step.vibration_pattern == 10
        assert step.vibration_intensity == 10
        assert step.suction_pattern == 10
        # pattern clamped to 10 is not a bucketed pattern
        assert step.suction_intensity == 9

    def test_temperature_not_clamped(self):
        pref = PreferenceRecord(heat_level=25)
        step = build_step(0, pref, (True, True), _raw())
        assert step.internal_temp == 25
        assert step.external_temp == 25

    def test_lube_clamped(self):
        pref = PreferenceRecord(lubrication_level=14)
        step = build_step(0, pref, (True, True), _raw())
        assert step.internal_lube == 10
        assert step.external_lube == 10

    def test_disabled_channel_zeroes_temp_and_lube(self):
        pref = PreferenceRecord(heat_level=8, lubrication_level=6)
        step = build_step(0, pref, (False, True), _raw())
        assert step.internal_temp == 0
        assert step.internal_lube == 0
        assert step.external_temp == 8
        assert step.external_lube == 6


class TestSynthesizeStep:
    def test_uses_oracle_first_value(self):
        oracle = FakeOracle(
            vibration_pattern=lambda *a: [3, 99],
            vibration_intensity=lambda *a: [7],
            suction_pattern=lambda *a: [4],
            suction_intensity=lambda *a: [9, 1],
        )
        step = synthesize_step(10, PreferenceRecord(), (True, True), oracle)
        assert step.index == 11
        assert step.vibration_pattern == 3
        assert step.vibration_intensity == 7
        assert step.suction_pattern == 4
        assert step.suction_intensity == 3

    def test_empty_oracle_results_are_zero(self):
        oracle = FakeOracle(
            vibration_pattern=lambda *a: [],
            vibration_intensity=lambda *a: None,
            suction_pattern=lambda *a: [],
            suction_intensity=lambda *a: None,
        )
        step = synthesize_step(0, PreferenceRecord(), (True, True), oracle)
        assert (step.vibration_pattern, step.vibration_intensity) == (0, 0)
        assert (step.suction_pattern, step.suction_intensity) == (0, 0)
