"""
Draft lifecycle over the drafts tab.

The tab is an append-only log: saving never updates a prior row, so one draft id
may own several rows. Listing orders by timestamp; load and delete act on the
first row whose draft id matches, scanning from the top.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

from pydantic import ValidationError

from schemas.draft import DraftSummary
from schemas.submission import SubmissionSchema
from services.errors import DraftCorruptedError, DraftNotFoundError
from services.normalizer import DEFAULT_TIMEZONE, format_timestamp, parse_timestamp
from services.row_projector import (
    DRAFT_ID_COLUMN,
    DRAFT_JSON_COLUMN,
    DRAFT_TIMESTAMP_COLUMN,
    draft_row,
)

logger = logging.getLogger(__name__)

# Read range covering every draft column (29 used, AD leaves one spare).
DRAFT_COLUMNS = "A:AD"

# Mutations from this process go through one lock. The lock does not protect
# against other processes writing the same spreadsheet.
_write_lock = asyncio.Lock()
# (spreadsheet id, tab title) -> numeric tab id
_gid_cache: dict[tuple[str, str], int] = {}


def _at(row: list[Any], index: int) -> str:
    value = row[index] if index < len(row) else ""
    return "" if value is None else str(value)


def _summary_from_row(row: list[Any]) -> DraftSummary:
    if not isinstance(row, list):
        raise TypeError(f"expected a list of cells, got {type(row).__name__}")
    return DraftSummary(
        operador=_at(row, 0),
        fecha_registro=_at(row, 1),
        nombre=_at(row, 5),
        apellidos=_at(row, 6),
        telefono=_at(row, 9),
        correo=_at(row, 8),
        draft_id=_at(row, DRAFT_ID_COLUMN),
        timestamp=_at(row, DRAFT_TIMESTAMP_COLUMN),
        operador_borrador=_at(row, 0),
        json_data=_at(row, DRAFT_JSON_COLUMN),
    )


class DraftStore:
    def __init__(
        self,
        sheets,
        sheet_name: str,
        sheet_gid: Optional[int] = None,
        tz_name: str = DEFAULT_TIMEZONE,
        lock: Optional[asyncio.Lock] = None,
    ):
        self.sheets = sheets
        self.sheet_name = sheet_name
        self._sheet_gid = sheet_gid
        self.tz_name = tz_name
        self._lock = lock or _write_lock

    async def save(
        self,
        submission: SubmissionSchema,
        draft_id: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> tuple[str, str]:
        """Append a new draft row unconditionally. Returns (draft_id, timestamp)."""
        timestamp = format_timestamp(tz_name=self.tz_name)
        row = draft_row(submission, draft_id, timestamp, payload)
        async with self._lock:
            await self.sheets.append_rows(self.sheet_name, [row])
        logger.info("Draft %s saved at %s", draft_id, timestamp)
        return draft_id, timestamp

    async def _data_rows(self) -> list[tuple[int, list[Any]]]:
        """(sheet row index, cells) for every row below the header."""
        rows = await self.sheets.read_rows(self.sheet_name, DRAFT_COLUMNS)
        return list(enumerate(rows))[1:]

    async def list_drafts(self) -> list[DraftSummary]:
        """Every draft row, newest first. Rows that cannot be read are skipped."""
        drafts: list[DraftSummary] = []
        for index, row in await self._data_rows():
            try:
                drafts.append(_summary_from_row(row))
            except (TypeError, ValidationError) as e:
                logger.warning("Skipping unreadable draft row %d: %s", index, e)
        drafts.sort(key=lambda d: parse_timestamp(d.timestamp, self.tz_name), reverse=True)
        return drafts

    async def _find(self, draft_id: str, need_json: bool = False) -> tuple[int, list[Any]]:
        for index, row in await self._data_rows():
            if not isinstance(row, list) or _at(row, DRAFT_ID_COLUMN) != draft_id:
                continue
            if need_json and not _at(row, DRAFT_JSON_COLUMN):
                continue
            return index, row
        raise DraftNotFoundError(draft_id)

    async def load(self, draft_id: str) -> dict[str, Any]:
        """Raw payload of the first row carrying this draft id (not necessarily the newest)."""
        index, row = await self._find(draft_id, need_json=True)
        try:
            return json.loads(_at(row, DRAFT_JSON_COLUMN))
        except json.JSONDecodeError as e:
            raise DraftCorruptedError(f"Draft {draft_id!r} at row {index} has invalid JSON: {e.msg}") from e

    async def sheet_gid(self) -> int:
        if self._sheet_gid is None:
            key = (getattr(self.sheets, "spreadsheet_id", ""), self.sheet_name)
            if key not in _gid_cache:
                _gid_cache[key] = await self.sheets.sheet_id_for(self.sheet_name)
            self._sheet_gid = _gid_cache[key]
        return self._sheet_gid

    async def delete(self, draft_id: str) -> int:
        """Remove the first row carrying this draft id. Returns the removed row index."""
        async with self._lock:
            index, _ = await self._find(draft_id)
            gid = await self.sheet_gid()
            await self.sheets.delete_row(gid, index)
        logger.info("Draft %s deleted (row %d)", draft_id, index)
        return index
