import uuid
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, UploadFile, File, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import FileResponse

import crud, schemas
from database import get_db
from config import settings as global_app_settings, Settings
from exceptions import BlobNotFound, MissingFile, PersistenceFailure
from logging_config import get_logger
from storage import BlobStore

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
SAVE_FAILED_MESSAGE = "Failed to save file information"

router = APIRouter(
    tags=["files"],
)

def attachment_disposition(original_name: str) -> str:
    cleaned = original_name.replace("\r", "").replace("\n", "")
    ascii_name = "".join(c if c.isascii() else "_" for c in cleaned)
    quoted_name = ascii_name.replace("\\", "\\\\").replace('"', '\\"')
    disposition = f'attachment; filename="{quoted_name}"'
    # Header values go out as latin-1, so non-ASCII names travel in filename* only.
    if not cleaned.isascii():
        disposition += f"; filename*=utf-8''{quote(cleaned, safe='')}"
    return disposition

def get_settings():
    return global_app_settings

def get_blob_store(current_settings: Settings = Depends(get_settings)) -> BlobStore:
    return BlobStore(current_settings.UPLOADS_DIR)

@router.post("/upload", response_model=schemas.UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    if file is None or not file.filename:
        logger.warning("Upload request without a file part")
        raise MissingFile("Upload request without a file part")

    logger.info(f"Upload request for filename: '{file.filename}', content_type: '{file.content_type}'")
    file_id = str(uuid.uuid4())
    try:
        stored_name, size = await blob_store.store(file.filename, file)
    except PersistenceFailure as e:
        raise PersistenceFailure(e.detail, message=SAVE_FAILED_MESSAGE) from e
    finally:
        await file.close()

    file_record_create = schemas.FileRecordCreate(
        id=file_id,
        original_name=file.filename,
        stored_name=stored_name,
        mime_type=file.content_type,
        size=size
    )
    try:
        db_file_record = await crud.create_file_record(db, file_record=file_record_create)
    except PersistenceFailure as e:
        logger.error(f"Blob {stored_name} left without metadata after failed insert for file_id: {file_id}")
        raise PersistenceFailure(e.detail, message=SAVE_FAILED_MESSAGE) from e
    logger.info(f"Saved '{db_file_record.original_name}' (ID: {db_file_record.id}) metadata to DB.")

    return schemas.UploadResponse(
        fileId=db_file_record.id,
        fileName=db_file_record.original_name,
        fileSize=db_file_record.size
    )

@router.get("/download/{file_id}")
async def download_file(
    file_id: str,
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store)
):
    logger.info(f"Download request for file_id: {file_id}")
    file_record = await crud.get_file_record_by_id(db, file_id=file_id)

    try:
        file_path_on_disk = blob_store.resolve(file_record.stored_name)
    except BlobNotFound:
        logger.error(f"File for ID {file_id} found in DB (stored_name: {file_record.stored_name}) but not on disk. Inconsistency!")
        raise
    logger.debug(f"Serving file from path: {file_path_on_disk} for file_id: {file_id}")

    media_type = file_record.mime_type or DEFAULT_MIME_TYPE
    return FileResponse(
        path=file_path_on_disk,
        media_type=media_type,
        headers={
            "Content-Type": media_type,
            "Content-Disposition": attachment_disposition(file_record.original_name),
        }
    )

@router.get("/file/{file_id}", response_model=schemas.FileInfo)
async def get_file_info(
    file_id: str,
    db: AsyncSession = Depends(get_db)
):
    logger.info(f"Info request for file_id: {file_id}")
    return await crud.get_file_record_by_id(db, file_id=file_id)
