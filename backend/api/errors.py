from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from domain.exceptions import RapmaniaError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

async def rapmania_error_handler(request: Request, exc: RapmaniaError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError.from_pydantic(exc.errors())
    logger.info(f"{request.method} {request.url.path} -> 400: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)

async def unhandled_exception_handler(request: Request, exc: Exception):
    # Tracebacks stay in the server log
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})

def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(RapmaniaError, rapmania_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
