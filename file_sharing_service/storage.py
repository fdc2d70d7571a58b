import uuid
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Tuple

import aiofiles
from fastapi import UploadFile

from exceptions import BlobNotFound, PersistenceFailure
from logging_config import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024

class BlobStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_root(self) -> Path:
        if not self.root.exists():
            logger.info(f"Creating file storage directory at {self.root}")
            self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    @staticmethod
    def generate_stored_name(original_name: str) -> str:
        # Client names may carry either separator; keep only the last component.
        base_name = PureWindowsPath(PurePosixPath(original_name or "").name).name
        if base_name in ("", ".", ".."):
            return str(uuid.uuid4())
        return f"{uuid.uuid4()}-{base_name}"

    async def store(self, original_name: str, upload: UploadFile) -> Tuple[str, int]:
        self.ensure_root()
        stored_name = self.generate_stored_name(original_name)
        local_file_path = self.root / stored_name

        logger.info(f"Saving '{original_name}' to {local_file_path}")
        size = 0
        try:
            async with aiofiles.open(local_file_path, 'wb') as out_file:
                while chunk := await upload.read(CHUNK_SIZE):
                    await out_file.write(chunk)
                    size += len(chunk)
        except OSError as e:
            logger.exception(f"Error saving '{original_name}' to {local_file_path}")
            if local_file_path.is_file():
                local_file_path.unlink()
            raise PersistenceFailure(str(e)) from e
        return stored_name, size

    def resolve(self, stored_name: str) -> Path:
        if (
            not stored_name
            or stored_name in (".", "..")
            or "/" in stored_name
            or "\\" in stored_name
            or Path(stored_name).is_absolute()
        ):
            logger.warning(f"Rejected stored name with path segments: {stored_name!r}")
            raise BlobNotFound(f"Invalid stored name: {stored_name!r}")

        root = self.root.resolve()
        file_path = (root / stored_name).resolve()
        if file_path.parent != root:
            logger.warning(f"Stored name {stored_name!r} resolves outside {root}")
            raise BlobNotFound(f"Invalid stored name: {stored_name!r}")
        if not file_path.is_file():
            raise BlobNotFound(f"No file at {file_path}")
        return file_path
