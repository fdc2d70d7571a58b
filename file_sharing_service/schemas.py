from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

class FileRecordBase(BaseModel):
    original_name: str
    mime_type: Optional[str] = None
    size: int

class FileRecordCreate(FileRecordBase):
    id: str
    stored_name: str

class FileInfo(FileRecordBase):
    id: str
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UploadResponse(BaseModel):
    message: str = "File uploaded successfully"
    fileId: str
    fileName: str
    fileSize: int

class ErrorResponse(BaseModel):
    error: str
