# freshcart/api/errors.py
from fastapi import Request
from fastapi.responses import JSONResponse

from freshcart.domain.errors import (
    AdminRequiredError,
    AuthRequiredError,
    CatalogUnavailableError,
    CheckoutInProgressError,
    CheckoutStateError,
    CheckoutUnavailableError,
    CheckoutValidationError,
    EmailDispatchError,
    EmptyCartError,
    FreshCartError,
    OrderCreateError,
    OrderLinesError,
    OrderNotFoundError,
    ProductNotFoundError,
    RemoteWriteError,
)
from freshcart.domain.schemas import Toast
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    CheckoutValidationError: 400,
    EmptyCartError: 400,
    CheckoutStateError: 400,
    AuthRequiredError: 401,
    AdminRequiredError: 403,
    OrderNotFoundError: 404,
    ProductNotFoundError: 404,
    CheckoutInProgressError: 409,
    OrderCreateError: 502,
    OrderLinesError: 502,
    EmailDispatchError: 502,
    CheckoutUnavailableError: 503,
    CatalogUnavailableError: 503,
}


async def freshcart_error_handler(request: Request, exc: FreshCartError) -> JSONResponse:
    """Map FreshCartError subclasses to HTTP responses with a toast for the UI."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {status_code}: {exc}")

    content = {
        "detail": str(exc),
        "error_type": type(exc).__name__,
        "toast": Toast(title=exc.title, description=str(exc), variant="destructive").model_dump(),
    }

    if isinstance(exc, AuthRequiredError):
        content["redirect"] = exc.redirect
    if isinstance(exc, CheckoutValidationError):
        content["missing"] = exc.missing
    if isinstance(exc, RemoteWriteError):
        content["step"] = exc.step
    if isinstance(exc, (EmailDispatchError, CheckoutUnavailableError, CatalogUnavailableError)):
        content["retryable"] = exc.retryable

    return JSONResponse(status_code=status_code, content=content)
