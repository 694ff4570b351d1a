"""
Thin async adapters over the Google Sheets v4 and Drive v3 APIs.

googleapiclient is blocking and its service objects are not thread-safe, so a
fresh service is built for each request and every call runs in a worker thread.
"""
from __future__ import annotations

import asyncio
import io
import json
import logging
from typing import Any, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from services.errors import GoogleCredentialsError, GoogleServiceError

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
]
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def load_credentials(raw: Optional[str]) -> service_account.Credentials:
    """Build service-account credentials from the JSON key stored in the environment."""
    if not raw:
        raise GoogleCredentialsError(
            "Google service-account credentials are not configured (GOOGLE_CREDENTIALS)."
        )
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise GoogleCredentialsError(f"Invalid credentials JSON: {e.msg}") from e
    try:
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    except (ValueError, KeyError) as e:
        raise GoogleCredentialsError(f"Unusable service-account key: {e}") from e


async def _execute(request, what: str) -> dict[str, Any]:
    try:
        return await asyncio.to_thread(request.execute)
    except HttpError as e:
        logger.error("Google API call failed (%s): %s", what, e)
        raise GoogleServiceError(f"{what} failed: {e.reason or e}") from e
    except (GoogleAuthError, OSError) as e:
        # Token refresh and connection failures, raised before any HTTP response.
        logger.error("Google API unreachable (%s): %r", what, e)
        raise GoogleServiceError(f"{what} failed: {e}") from e


class SheetsClient:
    """Append/read/delete access to the tabs of one spreadsheet."""

    def __init__(self, service, spreadsheet_id: str):
        self._service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_credentials(cls, credentials, spreadsheet_id: str) -> "SheetsClient":
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(service, spreadsheet_id)

    async def append_rows(self, sheet_name: str, rows: list[list[Any]]) -> dict[str, Any]:
        if not rows:
            return {}
        request = self._service.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=f"{sheet_name}!A1",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": rows},
        )
        result = await _execute(request, f"append to {sheet_name}")
        logger.info("Appended %d row(s) to %s", len(rows), sheet_name)
        return result

    async def read_rows(self, sheet_name: str, columns: str = "A:AD") -> list[list[Any]]:
        """All rows of the tab, header included. Trailing empty cells are omitted by the API."""
        request = self._service.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=f"{sheet_name}!{columns}",
        )
        result = await _execute(request, f"read {sheet_name}")
        return result.get("values", [])

    async def delete_row(self, sheet_gid: int, index: int) -> None:
        """Remove one row by zero-based index; rows below shift up."""
        request = self._service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={
                "requests": [{
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet_gid,
                            "dimension": "ROWS",
                            "startIndex": index,
                            "endIndex": index + 1,
                        }
                    }
                }]
            },
        )
        await _execute(request, f"delete row {index}")

    async def sheet_id_for(self, title: str) -> int:
        """Numeric tab id (the #gid in the URL) for a tab title."""
        request = self._service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets(properties(sheetId,title))",
        )
        meta = await _execute(request, "read spreadsheet metadata")
        for sheet in meta.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == title:
                return props["sheetId"]
        raise GoogleServiceError(f"Sheet tab {title!r} not found in spreadsheet")


class DriveClient:
    def __init__(self, service):
        self._service = service

    @classmethod
    def from_credentials(cls, credentials) -> "DriveClient":
        return cls(build("drive", "v3", credentials=credentials, cache_discovery=False))

    async def create_folder(self, name: str, parent_id: str) -> str:
        request = self._service.files().create(
            body={"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]},
            fields="id",
            supportsAllDrives=True,
        )
        result = await _execute(request, "create folder")
        return result["id"]

    async def upload_file(
        self, name: str, mime_type: Optional[str], content: bytes, folder_id: str
    ) -> str:
        """Upload one file into a folder and return its webViewLink."""
        media = MediaIoBaseUpload(
            io.BytesIO(content),
            mimetype=mime_type or "application/octet-stream",
            resumable=False,
        )
        request = self._service.files().create(
            body={"name": name, "parents": [folder_id]},
            media_body=media,
            fields="id, webViewLink",
            supportsAllDrives=True,
        )
        result = await _execute(request, f"upload {name}")
        return result.get("webViewLink")
