"""
Gestionnaires d'exceptions.
- Erreurs métier (BookingServiceError): code HTTP porté par l'erreur, message générique.
- HTTPException (401/403 du back-office, 404 de routage...): même enveloppe JSON.
- Toute autre exception: loggée avec la trace, 500 générique côté client.
- Middleware interne (register_unhandled_error_middleware): même 500 générique, avec en-têtes CORS.
Enveloppe unique: {"success": false, "message": "..."}.
"""
import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventpay.errors import BookingServiceError

logger = logging.getLogger(__name__)

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookingServiceError)
    async def booking_service_error(request: Request, exc: BookingServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s %s", request.method, request.url.path, exc.status_code, type(exc).__name__)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("unhandled error %s %s", request.method, request.url.path)
        return _error(500, "Something went wrong")

def register_unhandled_error_middleware(app: FastAPI) -> None:
    """
    Convertit les exceptions non gérées en 500 générique à l'intérieur de la pile
    CORS: à enregistrer avant register_basic_middlewares pour que la réponse
    d'erreur porte les en-têtes CORS. Le handler Exception ci-dessus reste le
    dernier recours (erreurs levées dans les middlewares externes).
    """
    @app.middleware("http")
    async def unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unhandled error %s %s", request.method, request.url.path)
            return _error(500, "Something went wrong")
