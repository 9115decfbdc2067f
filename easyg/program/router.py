"""Program HTTP router — compile answers, serve stored programs."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from easyg.auth import require_api_key
from easyg.config import settings
from easyg.db import get_session
from easyg.program import store
from easyg.program.compiler import compile_program, validate_request
from easyg.program.errors import InvalidInput, OracleUnavailable, StoreFailure
from easyg.program.models import ProgramData, ProgramRequest, ProgramResponse, StoredProgramResponse
from easyg.program.oracle import PatternOracle, load_oracle
from easyg.program.question_map import PhaseLabels, get_phase_labels
from easyg.program.wire import download_view, program_to_wire, temps_lubrication_view

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/program", tags=["program"], dependencies=[Depends(require_api_key)])


@lru_cache(maxsize=4)
def _load_oracle_cached(path: str) -> PatternOracle:
    return load_oracle(path)


def get_oracle() -> PatternOracle:
    """Resolve the configured pattern oracle. Raises OracleUnavailable when there is none."""
    if not settings.pattern_oracle:
        raise OracleUnavailable("No pattern oracle configured")
    return _load_oracle_cached(settings.pattern_oracle)


def _phase_labels(schema_version: str | None) -> PhaseLabels:
    version = schema_version or settings.questionnaire_schema
    labels = get_phase_labels(version)
    if labels is None:
        raise InvalidInput(f"Unknown questionnaire schema: {version}")
    return labels


async def _load_stored(session: AsyncSession, mac_address: str) -> list[dict]:
    try:
        wire = await store.fetch_program(session, mac_address)
    except StoreFailure as exc:
        logger.exception("Error fetching program for %s", mac_address)
        raise HTTPException(status_code=500, detail=exc.message) from exc
    if not wire:
        raise HTTPException(status_code=404, detail="No data found for the given MAC address")
    return wire


# ---------------------------------------------------------------------------
# POST /program/answers
# ---------------------------------------------------------------------------


@router.post("/answers", response_model=ProgramResponse)
async def set_answers(
    body: ProgramRequest,
    session: AsyncSession = Depends(get_session),
) -> ProgramResponse:
    # Input is checked before the oracle is resolved.
    try:
        validate_request(body.mac_address, body.answers)
        labels = _phase_labels(body.schema_version)
        oracle = get_oracle()
        program = compile_program(body.mac_address, body.answers, oracle, labels, settings.tag_match)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except OracleUnavailable as exc:
        logger.error("Compile failed for %s: %s", body.mac_address, exc.message)
        raise HTTPException(status_code=503, detail=exc.message) from exc

    wire = program_to_wire(program, settings.wire_include_reserved)

    try:
        await store.upsert_program(session, program.device_id, wire)
    except StoreFailure as exc:
        logger.exception("Error saving program for %s", program.device_id)
        raise HTTPException(status_code=500, detail=exc.message) from exc

    return ProgramResponse(
        message="Answers received and JSON saved successfully",
        mac_address=program.device_id,
        data=ProgramData(easygjson=wire),
    )


# ---------------------------------------------------------------------------
# GET /program/download, /program/temps-lubrication
# ---------------------------------------------------------------------------


@router.get("/download", response_model=StoredProgramResponse)
async def download(
    session: AsyncSession = Depends(get_session),
    mac_address: str = Query(..., description="Device MAC address"),
) -> StoredProgramResponse:
    wire = await _load_stored(session, mac_address)
    return StoredProgramResponse(mac_address=mac_address, data=download_view(wire))


@router.get("/temps-lubrication", response_model=StoredProgramResponse)
async def temps_lubrication(
    session: AsyncSession = Depends(get_session),
    mac_address: str = Query(..., description="Device MAC address"),
) -> StoredProgramResponse:
    wire = await _load_stored(session, mac_address)
    return StoredProgramResponse(mac_address=mac_address, data=temps_lubrication_view(wire))
