# bodega/core/exceptions.py
"""
Errores de dominio de la bodega y su traducción a respuestas HTTP.

Los servicios lanzan estas excepciones; nunca construyen HTTPException.
Los handlers registrados en la app las serializan como ErrorResponse.
"""
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bodega.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class BodegaError(Exception):
    """Base de todos los errores de dominio"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "BODEGA_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(BodegaError):
    """Entrada faltante o mal formada; se detecta antes de tocar la BD"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class NotFoundError(BodegaError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class StateConflictError(BodegaError):
    """Transición de estado no permitida para un pedido"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "STATE_CONFLICT"


class TransactionFailed(BodegaError):
    """Fallo del almacén durante una operación multi-paso; todo se revirtió"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "TRANSACTION_FAILED"

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(
            f"Error al {operation}",
            details={"error": str(cause)},
        )
        self.operation = operation
        self.cause = cause


def _error_response(status_code: int, message: str, error_code: str, details=None) -> JSONResponse:
    body = ErrorResponse(message=message, error_code=error_code, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def bodega_error_handler(request: Request, exc: BodegaError) -> JSONResponse:
    if isinstance(exc, TransactionFailed):
        logger.error(f"{request.method} {request.url.path} - {exc.message}: {exc.cause!r}")
    else:
        logger.warning(f"{request.method} {request.url.path} - {exc.error_code}: {exc.message}")
    return _error_response(exc.status_code, exc.message, exc.error_code, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    logger.info(f"{request.method} {request.url.path} - payload inválido: {errors}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Datos de entrada inválidos",
        ValidationError.error_code,
        {"errors": errors},
    )


def setup_exception_handlers(app: FastAPI):
    """Registrar los handlers de errores de dominio"""
    app.add_exception_handler(BodegaError, bodega_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
