from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from database import create_db_and_tables, close_db
import schemas
from exceptions import FileServiceError, MissingFile
from routers import files as files_router
from logging_config import get_logger
from config import settings
from storage import BlobStore

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("File Sharing Service starting up...")
    BlobStore(settings.UPLOADS_DIR).ensure_root()
    logger.info(f"File storage path configured at: {settings.UPLOADS_DIR}")
    await create_db_and_tables()
    yield
    logger.info("File Sharing Service shutting down...")
    await close_db()

app = FastAPI(
    title="File Sharing Service",
    version="0.1.0",
    lifespan=lifespan
)

def error_response(exc: FileServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=schemas.ErrorResponse(error=exc.message).model_dump())

@app.exception_handler(FileServiceError)
async def file_service_error_handler(request: Request, exc: FileServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    return error_response(exc)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info(f"{request.method} {request.url.path} rejected: {errors}")
    # A "file" form field that is not a file part counts as no upload.
    if any(tuple(error.get("loc", ()))[:2] == ("body", "file") for error in errors):
        return error_response(MissingFile())
    return JSONResponse(status_code=422, content=schemas.ErrorResponse(error="Invalid request").model_dump())

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} raised an unexpected error", exc_info=exc)
    return error_response(FileServiceError())

app.include_router(files_router.router)

@app.get("/ping")
async def ping():
    return {"ping": "pong"}

@app.get("/")
async def read_root():
    index_path = settings.STATIC_DIR / "index.html"
    if not index_path.is_file():
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return FileResponse(index_path)

if settings.STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server is running on http://{settings.HOST}:{settings.PORT}")
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
