from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import models, schemas
from exceptions import DuplicateKey, PersistenceFailure, RecordNotFound
from logging_config import get_logger

logger = get_logger(__name__)

async def get_file_record_by_id(db: AsyncSession, file_id: str) -> models.FileRecord:
    try:
        result = await db.execute(select(models.FileRecord).filter(models.FileRecord.id == file_id))
    except SQLAlchemyError as e:
        logger.exception(f"Error querying database for file_id: {file_id}")
        raise PersistenceFailure(str(e)) from e
    file_record = result.scalars().first()
    if file_record is None:
        raise RecordNotFound(f"No metadata row for file_id: {file_id}")
    return file_record

async def create_file_record(db: AsyncSession, file_record: schemas.FileRecordCreate) -> models.FileRecord:
    db_file_record = models.FileRecord(
        id=file_record.id,
        original_name=file_record.original_name,
        stored_name=file_record.stored_name,
        mime_type=file_record.mime_type,
        size=file_record.size
    )
    db.add(db_file_record)
    try:
        await db.commit()
        await db.refresh(db_file_record)
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"Duplicate key inserting file_id: {file_record.id}, stored_name: {file_record.stored_name}")
        raise DuplicateKey(str(e)) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception(f"Error inserting file_id: {file_record.id}")
        raise PersistenceFailure(str(e)) from e
    return db_file_record
