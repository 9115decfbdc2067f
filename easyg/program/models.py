"""Program value types and the HTTP request/response contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

STEP_COUNT = 120
RESERVED_VALUE = 5

# (internal, external)
Channels = tuple[bool, bool]


class OrderChoice(str, Enum):
    internal_then_external = "internal_then_external"
    external_then_internal = "external_then_internal"
    combined_from_start = "combined_from_start"


@dataclass(frozen=True, slots=True)
class PhaseProfile:
    start: int = 0
    mid: int = 0
    end: int = 0


@dataclass(frozen=True, slots=True)
class PreferenceRecord:
    channel_enabled: Channels = (False, False)
    stimulation_order: OrderChoice | None = None
    heat_level: int = 0
    intensity_profile: PhaseProfile = field(default_factory=PhaseProfile)
    closeness_profile: PhaseProfile = field(default_factory=PhaseProfile)
    variety_level: int = 0
    lubrication_level: int = 0


@dataclass(frozen=True, slots=True)
class Step:
    index: int
    external_temp: int
    internal_temp: int
    vibration_pattern: int
    vibration_intensity: int
    suction_pattern: int
    suction_intensity: int
    external_lube: int
    internal_lube: int
    reserved: int = RESERVED_VALUE


@dataclass(frozen=True, slots=True)
class Program:
    device_id: str
    steps: tuple[Step, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, i: int) -> Step:
        return self.steps[i]

    def __iter__(self):
        return iter(self.steps)


# ---------------------------------------------------------------------------
# HTTP contracts
# ---------------------------------------------------------------------------


class ProgramRequest(BaseModel):
    """Body of POST /program/answers.

    ``mac_address`` and ``answers`` are checked by the compiler, not here: a
    missing or mistyped value is an InvalidInput (400).
    """

    mac_address: Any = None
    answers: Any = None
    schema_version: str | None = None


class ProgramData(BaseModel):
    easygjson: list[dict[str, int]] = Field(default_factory=list)


class ProgramResponse(BaseModel):
    message: str
    mac_address: str
    data: ProgramData


class StoredProgramResponse(BaseModel):
    mac_address: str
    data: Any
