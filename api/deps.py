"""
Per-request construction of the external collaborators.
Tests replace these through app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends

from config import settings
from services.client_id import ClientIdGenerator
from services.drafts import DraftStore
from services.google_workspace import DriveClient, SheetsClient, load_credentials
from services.submission import SheetNames


@lru_cache
def _credentials():
    return load_credentials(settings.google_credentials)


@lru_cache
def get_client_id_generator() -> ClientIdGenerator:
    return ClientIdGenerator()


def get_sheets_client() -> SheetsClient:
    return SheetsClient.from_credentials(_credentials(), settings.spreadsheet_id)


def get_drive_client() -> DriveClient:
    return DriveClient.from_credentials(_credentials())


def get_sheet_names() -> SheetNames:
    return SheetNames(
        policies=settings.policies_sheet,
        plans=settings.plans_sheet,
        payments=settings.payments_sheet,
    )


def get_draft_store(sheets: SheetsClient = Depends(get_sheets_client)) -> DraftStore:
    return DraftStore(
        sheets,
        settings.drafts_sheet,
        sheet_gid=settings.drafts_sheet_gid,
        tz_name=settings.timezone,
    )
