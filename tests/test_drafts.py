"""
Draft store over an append-only tab: save, list ordering, load first match, delete one row.
Run from the repository root: python -m pytest tests/test_drafts.py -v
"""
import asyncio
import json
import unittest
from unittest.mock import patch

from schemas.submission import DraftSaveRequest
from services.drafts import DraftStore
from services.errors import DraftCorruptedError, DraftNotFoundError
from services.row_projector import DRAFT_ID_COLUMN, DRAFT_JSON_COLUMN, DRAFT_TIMESTAMP_COLUMN
from fakes import FakeSheetsClient

TAB = "Borrador"
HEADER = ["Operador", "Fecha"]


def _draft_row(draft_id, timestamp, payload=None, nombre="Ana"):
    row = [""] * (DRAFT_JSON_COLUMN + 1)
    row[0] = "Maria"
    row[5] = nombre
    row[DRAFT_ID_COLUMN] = draft_id
    row[DRAFT_TIMESTAMP_COLUMN] = timestamp
    row[DRAFT_JSON_COLUMN] = json.dumps(payload if payload is not None else {"draftId": draft_id})
    return row


def _request(draft_id, **fields):
    return DraftSaveRequest.model_validate({"draftId": draft_id, **fields})


class TestDraftStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.sheets = FakeSheetsClient({TAB: [HEADER]})
        self.sheets.gids[TAB] = 42
        self.store = DraftStore(self.sheets, TAB, lock=asyncio.Lock())

    async def test_save_always_appends(self):
        await self.store.save(_request("d1", nombre="Ana"), "d1")
        await self.store.save(_request("d1", nombre="Ana", telefono="555"), "d1")
        rows = self.sheets.tabs[TAB]
        self.assertEqual(len(rows), 3)
        self.assertEqual([r[DRAFT_ID_COLUMN] for r in rows[1:]], ["d1", "d1"])

    async def test_save_returns_timestamp_written_to_row(self):
        with patch("services.drafts.format_timestamp", return_value="16/10/2026, 09:30:00"):
            draft_id, timestamp = await self.store.save(_request("d9"), "d9")
        self.assertEqual((draft_id, timestamp), ("d9", "16/10/2026, 09:30:00"))
        self.assertEqual(self.sheets.tabs[TAB][1][DRAFT_TIMESTAMP_COLUMN], timestamp)

    async def test_list_skips_header_and_sorts_newest_first(self):
        self.sheets.tabs[TAB] += [
            _draft_row("old", "10/02/2026, 09:00:00"),
            _draft_row("new", "02/03/2026, 09:00:00"),
            _draft_row("broken-ts", "ayer"),
        ]
        drafts = await self.store.list_drafts()
        self.assertEqual([d.draft_id for d in drafts], ["new", "old", "broken-ts"])
        self.assertEqual(drafts[0].operador, "Maria")
        self.assertEqual(drafts[0].operador_borrador, "Maria")

    async def test_list_tolerates_short_and_malformed_rows(self):
        self.sheets.tabs[TAB] += [["Maria", "10/16/2026"], "not-a-row", _draft_row("d1", "02/03/2026, 09:00:00")]
        with self.assertLogs("services.drafts", level="WARNING") as logs:
            drafts = await self.store.list_drafts()
        self.assertEqual(len(logs.records), 1)
        self.assertIn("row 2", logs.output[0])
        self.assertEqual(len(drafts), 2)
        self.assertEqual(drafts[0].draft_id, "d1")
        self.assertEqual(drafts[1].draft_id, "")

    async def test_duplicate_ids_list_both_and_load_first(self):
        self.sheets.tabs[TAB] += [
            _draft_row("dup", "01/03/2026, 09:00:00", {"version": 1}),
            _draft_row("dup", "05/03/2026, 09:00:00", {"version": 2}),
        ]
        drafts = await self.store.list_drafts()
        self.assertEqual([d.draft_id for d in drafts], ["dup", "dup"])
        loaded = await self.store.load("dup")
        self.assertEqual(loaded, {"version": 1})

    async def test_load_skips_rows_without_json(self):
        empty = _draft_row("d1", "01/03/2026, 09:00:00")
        empty[DRAFT_JSON_COLUMN] = ""
        self.sheets.tabs[TAB] += [empty, _draft_row("d1", "02/03/2026, 09:00:00", {"ok": True})]
        self.assertEqual(await self.store.load("d1"), {"ok": True})

    async def test_load_missing_raises(self):
        with self.assertRaises(DraftNotFoundError):
            await self.store.load("nope")

    async def test_load_corrupted_json_raises(self):
        row = _draft_row("bad", "01/03/2026, 09:00:00")
        row[DRAFT_JSON_COLUMN] = "{not json"
        self.sheets.tabs[TAB].append(row)
        with self.assertRaises(DraftCorruptedError):
            await self.store.load("bad")

    async def test_saved_draft_loads_back(self):
        await self.store.save(_request("d2", nombre="Ana", ingresos="$1,000"), "d2")
        self.assertEqual(await self.store.load("d2"), {"draftId": "d2", "nombre": "Ana", "ingresos": "$1,000"})

    async def test_delete_removes_one_row_at_a_time(self):
        self.sheets.tabs[TAB] += [
            _draft_row("keep", "01/03/2026, 09:00:00"),
            _draft_row("dup", "02/03/2026, 09:00:00", {"version": 1}),
            _draft_row("dup", "03/03/2026, 09:00:00", {"version": 2}),
        ]
        index = await self.store.delete("dup")
        self.assertEqual(index, 2)
        self.assertEqual(self.sheets.deleted, [(42, 2)])
        self.assertEqual(await self.store.load("dup"), {"version": 2})

        await self.store.delete("dup")
        with self.assertRaises(DraftNotFoundError):
            await self.store.load("dup")
        with self.assertRaises(DraftNotFoundError):
            await self.store.delete("dup")
        self.assertEqual([r[DRAFT_ID_COLUMN] for r in self.sheets.tabs[TAB][1:]], ["keep"])

    async def test_configured_gid_skips_lookup(self):
        sheets = FakeSheetsClient({TAB: [HEADER, _draft_row("d1", "")]}, spreadsheet_id="other")
        sheets.gids[TAB] = 7
        store = DraftStore(sheets, TAB, sheet_gid=7, lock=asyncio.Lock())
        with patch.object(sheets, "sheet_id_for") as lookup:
            await store.delete("d1")
        lookup.assert_not_called()
        self.assertEqual(sheets.deleted, [(7, 1)])


if __name__ == "__main__":
    unittest.main()
