import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.deps import get_drive_client
from config import settings
from schemas.files import FolderCreate
from services.errors import GoogleServiceError
from services.google_workspace import DriveClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/upload-files")
async def upload_files(
    files: Optional[list[UploadFile]] = File(None),
    folder_id: Optional[str] = Form(None, alias="folderId"),
    drive: DriveClient = Depends(get_drive_client),
):
    """Upload each file, one at a time, into the client's Drive folder."""
    if not folder_id:
        raise HTTPException(status_code=400, detail="El ID de la carpeta es requerido.")
    links: list[str] = []
    try:
        for upload in files or []:
            content = await upload.read()
            links.append(
                await drive.upload_file(upload.filename or "archivo", upload.content_type, content, folder_id)
            )
    except GoogleServiceError:
        logger.exception("Upload to folder %s failed after %d file(s)", folder_id, len(links))
        raise HTTPException(status_code=500, detail="Error al subir archivos")
    logger.info("Uploaded %d file(s) to folder %s", len(links), folder_id)
    return {"message": "Archivos subidos exitosamente", "fileLinks": links}


@router.post("/create-folder", status_code=201)
async def create_folder(body: FolderCreate, drive: DriveClient = Depends(get_drive_client)):
    name = (body.folder_name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="El nombre de la carpeta es requerido.")
    try:
        folder_id = await drive.create_folder(name, settings.drive_folder_id)
    except GoogleServiceError:
        logger.exception("Creating folder %r failed", name)
        raise HTTPException(status_code=500, detail="Error interno del servidor")
    logger.info("Folder %r created with id %s", name, folder_id)
    return {"message": "Carpeta creada exitosamente", "folderId": folder_id}
