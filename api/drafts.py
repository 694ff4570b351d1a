import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from api.deps import get_draft_store
from schemas.submission import DraftSaveRequest
from services.drafts import DraftStore
from services.errors import DraftCorruptedError, DraftNotFoundError, GoogleServiceError
from utils.case import dict_keys_to_camel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["drafts"])

MSG_DRAFT_NOT_FOUND = "Borrador no encontrado"


def _upstream_error(action: str, e: Exception) -> HTTPException:
    return HTTPException(status_code=500, detail=f"Error interno al {action}: {e}")


@router.post("/save-draft")
async def save_draft(
    body: DraftSaveRequest,
    request: Request,
    store: DraftStore = Depends(get_draft_store),
):
    """Always appends a new draft row, even if this draft id was saved before."""
    # Stored verbatim so a load returns exactly what the form posted.
    payload = await request.json()
    try:
        draft_id, timestamp = await store.save(body, body.draft_id, payload)
    except GoogleServiceError as e:
        logger.exception("Saving draft %s failed", body.draft_id)
        raise _upstream_error("guardar borrador en Sheets", e)
    return {
        "message": "Borrador guardado exitosamente en Google Sheets",
        "draftId": draft_id,
        "timestamp": timestamp,
    }


@router.get("/list-drafts")
async def list_drafts(store: DraftStore = Depends(get_draft_store)):
    try:
        drafts = await store.list_drafts()
    except GoogleServiceError as e:
        logger.exception("Listing drafts failed")
        raise _upstream_error("listar borradores", e)
    logger.info("%d draft(s) listed", len(drafts))
    return {
        "message": "Borradores listados exitosamente" if drafts else "No hay borradores guardados",
        "drafts": [dict_keys_to_camel(d.model_dump()) for d in drafts],
        "total": len(drafts),
    }


@router.get("/load-draft/{draft_id}")
async def load_draft(draft_id: str, store: DraftStore = Depends(get_draft_store)):
    try:
        data = await store.load(draft_id)
    except DraftNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_DRAFT_NOT_FOUND)
    except (GoogleServiceError, DraftCorruptedError) as e:
        logger.exception("Loading draft %s failed", draft_id)
        raise _upstream_error("cargar borrador desde Sheets", e)
    return {"message": "Borrador cargado exitosamente", "data": data}


@router.delete("/delete-draft/{draft_id}")
async def delete_draft(draft_id: str, store: DraftStore = Depends(get_draft_store)):
    try:
        await store.delete(draft_id)
    except DraftNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_DRAFT_NOT_FOUND)
    except GoogleServiceError as e:
        logger.exception("Deleting draft %s failed", draft_id)
        raise _upstream_error("eliminar borrador de Sheets", e)
    return {"message": "Borrador eliminado exitosamente"}
