"""Entry point for the file store server."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from filestore.engine import StorageEngine
from filestore.exceptions import (
    StorageError,
    FileNotFoundError,
    FileAlreadyExistsError,
    InvalidOperationError,
    InvalidFileTypeError,
    StorageLimitError,
    StorageSystemError,
)
from server.analytics_routes import router as analytics_router
from server.config import LOG_LEVEL, SERVER_HOST, SERVER_PORT
from server.file_routes import router as file_router
from server.service_locator import get_storage_engine, set_storage_engine

logger = setup_logging('server', LOG_LEVEL)
setup_logging('filestore', LOG_LEVEL)

app = FastAPI(
    title="In-Memory File Store",
    description="Quota-tracked in-memory file store with tagging and versioning",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Create the storage engine unless one was registered before startup.
    """
    logger.info("File store server starting up...")

    if get_storage_engine() is None:
        set_storage_engine(StorageEngine())
        logger.info("Storage engine initialized")


@app.exception_handler(FileNotFoundError)
async def file_not_found_handler(request: Request, exc: FileNotFoundError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"File not found error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "code": "FILE_NOT_FOUND"}
    )


@app.exception_handler(FileAlreadyExistsError)
async def file_already_exists_handler(request: Request, exc: FileAlreadyExistsError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"File already exists error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "code": "FILE_ALREADY_EXISTS"}
    )


@app.exception_handler(StorageLimitError)
async def storage_limit_handler(request: Request, exc: StorageLimitError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Storage limit error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={"detail": str(exc), "code": "STORAGE_LIMIT"}
    )


@app.exception_handler(InvalidOperationError)
async def invalid_operation_handler(request: Request, exc: InvalidOperationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid operation error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_OPERATION"}
    )


@app.exception_handler(InvalidFileTypeError)
async def invalid_file_type_handler(request: Request, exc: InvalidFileTypeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid file type error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_FILE_TYPE"}
    )


@app.exception_handler(StorageSystemError)
async def storage_system_error_handler(request: Request, exc: StorageSystemError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage system error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "SYSTEM_ERROR"}
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


app.include_router(file_router)
app.include_router(analytics_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "In-Memory File Store API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns 200 if service is alive and an engine is registered.
    """
    engine = get_storage_engine()
    return {"status": "healthy", "service": "filestore", "engine": engine is not None}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "server.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
