from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookflix.logs import get_logger

LOG = get_logger("bookflix.errors")

INTERNAL_ERROR = "Internal Server Error"


class ApiError(Exception):
    """
    Error carrying the JSON body the frontend reads: either
    {"error": ...} or {"message": ...}.
    """

    def __init__(self, status_code: int, *, error: Optional[str] = None, message: Optional[str] = None):
        if (error is None) == (message is None):
            raise ValueError("ApiError takes exactly one of error= or message=")
        super().__init__(error or message)
        self.status_code = status_code
        self.body: Dict[str, Any] = {"error": error} if error is not None else {"message": message}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    LOG.error("database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request parameters",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOG.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
