import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_client_id_generator, get_sheet_names, get_sheets_client
from config import settings
from schemas.submission import SubmissionSchema
from services.client_id import ClientIdGenerator
from services.errors import GoogleServiceError
from services.google_workspace import SheetsClient
from services.submission import SheetNames, submit_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])


@router.post("/submit-form-data")
async def submit_form_data(
    body: SubmissionSchema,
    sheets: SheetsClient = Depends(get_sheets_client),
    client_ids: ClientIdGenerator = Depends(get_client_id_generator),
    sheet_names: SheetNames = Depends(get_sheet_names),
):
    try:
        result = await submit_submission(body, sheets, client_ids, sheet_names, tz_name=settings.timezone)
    except GoogleServiceError as e:
        logger.exception("Form submission for %s failed", body.folder_name or "<unnamed>")
        raise HTTPException(status_code=500, detail=f"Error interno al enviar el formulario a Sheets: {e}")
    return {
        "message": "Datos del formulario enviados exitosamente",
        "clientId": result.client_id,
        "folderName": result.folder_name,
    }
