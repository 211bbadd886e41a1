"""
Domain errors and the DRF exception handler.

Every failure leaves the API as a status code plus a JSON body:
    {"message": "...", "code": "...", ...extra}
Nothing is retried here; the caller decides.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger("mooncargo.errors")


class CargoError(APIException):
    """Base class. Keyword arguments are merged into the response body."""

    status_code    = status.HTTP_400_BAD_REQUEST
    default_detail = "Request rejected."
    default_code   = "BAD_REQUEST"

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail, code)
        self.extra = extra

    @property
    def code(self) -> str:
        return self.detail.code

    def as_body(self) -> dict:
        return {"message": str(self.detail), "code": self.code, **self.extra}


class NotFound(CargoError):
    status_code    = status.HTTP_404_NOT_FOUND
    default_detail = "Record not found."
    default_code   = "NOT_FOUND"


class ValidationError(CargoError):
    default_detail = "Invalid request."
    default_code   = "VALIDATION_ERROR"


class MissingPhone(ValidationError):
    default_detail = "A phone number is required before moving a shipment to delivery."
    default_code   = "MISSING_PHONE"


class InvalidAmount(ValidationError):
    default_detail = "Payment amount must be greater than 0."
    default_code   = "INVALID_AMOUNT"


class PinRequired(CargoError):
    status_code    = status.HTTP_403_FORBIDDEN
    default_detail = "A delivery PIN is required."
    default_code   = "PIN_REQUIRED"

    def __init__(self, detail=None, pin_created=False):
        super().__init__(detail, pinCreated=pin_created)
        self.pin_created = pin_created


class InternalError(CargoError):
    status_code    = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
    default_code   = "INTERNAL_ERROR"


def cargo_exception_handler(exc, context):
    """Render domain errors, DRF errors and unexpected failures the same way."""
    if isinstance(exc, CargoError):
        set_rollback()
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.detail)
        return Response(exc.as_body(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled error in %s", view.__class__.__name__ if view else "request",
            exc_info=exc,
        )
        return Response(InternalError().as_body(), status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(response.data, dict) and "detail" in response.data:
        detail = response.data["detail"]
        response.data = {"message": str(detail), "code": getattr(detail, "code", "error")}
    else:
        response.data = {"message": "Invalid request.", "code": "VALIDATION_ERROR", "errors": response.data}
    return response
