"""Program store — async access to device_programs.

Table: device_programs
  mac_address (TEXT, primary key), program (JSONB wire array),
  created_at (TIMESTAMPTZ), updated_at (TIMESTAMPTZ)

One row per device. Writing a program replaces the whole row; there is no
merge and no program history.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from easyg.program.errors import StoreFailure

logger = logging.getLogger(__name__)

PROGRAM_TABLE_DDL = (
    "CREATE TABLE IF NOT EXISTS device_programs ("
    "mac_address TEXT PRIMARY KEY, "
    "program JSONB NOT NULL, "
    "created_at TIMESTAMPTZ NOT NULL, "
    "updated_at TIMESTAMPTZ NOT NULL"
    ")"
)

_UPSERT_SQL = text(
    "INSERT INTO device_programs (mac_address, program, created_at, updated_at) "
    "VALUES (:mac_address, :program, :created_at, :updated_at) "
    "ON CONFLICT (mac_address) DO UPDATE SET "
    "program = EXCLUDED.program, "
    "created_at = EXCLUDED.created_at, "
    "updated_at = EXCLUDED.updated_at"
).bindparams(bindparam("program", type_=JSONB))


async def ensure_schema(session: AsyncSession) -> None:
    await session.execute(text(PROGRAM_TABLE_DDL))
    await session.commit()


async def upsert_program(
    session: AsyncSession,
    device_id: str,
    wire: list[dict[str, int]],
) -> None:
    """Store `wire` as the program for `device_id`, replacing any previous one.

    Raises StoreFailure on any database error; nothing is retried.
    """
    timestamp = datetime.now(timezone.utc)
    params: dict[str, Any] = {
        "mac_address": device_id,
        "program": wire,
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    try:
        await session.execute(_UPSERT_SQL, params)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreFailure(f"Could not save program for {device_id}: {exc}") from exc


async def fetch_program(session: AsyncSession, device_id: str) -> list[dict[str, Any]] | None:
    """Return the stored wire array for a device, or None when nothing is stored."""
    query = "SELECT mac_address, program FROM device_programs WHERE mac_address = :mac_address"
    try:
        result = await session.execute(text(query), {"mac_address": device_id})
    except SQLAlchemyError as exc:
        raise StoreFailure(f"Could not read program for {device_id}: {exc}") from exc

    row = result.fetchone()
    if row is None:
        return None
    columns = result.keys()
    return dict(zip(columns, row))["program"]
