"""Maps engine errors onto HTTP responses.

Protean's own handlers are registered first; the more specific engine
errors then get their own status codes. Bodies are ``{"error": messages}``,
or the plain message for exceptions raised without field messages.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import Forbidden, InsufficientStock, InvalidTransition

STATUS_CODES = {
    ValidationError: 400,  # includes InvalidStatus
    ObjectNotFoundError: 404,  # includes MedicineUnavailable
    Forbidden: 403,
    InsufficientStock: 409,
    InvalidTransition: 409,
}


def _handler_for(status_code):
    async def _handle(request: Request, exc) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"error": getattr(exc, "messages", None) or str(exc)})

    return _handle


def register_order_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code in STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler_for(status_code))
