"""
Error taxonomy shared by the storage layer, the order lifecycle and the
HTTP surface. Every error carries the status code the API answers with,
so routers never translate exceptions by hand.
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class OrderDeskError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderDeskError):
    """Caller-supplied data is malformed (missing field, bad attachment)."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(OrderDeskError):
    status_code = status.HTTP_404_NOT_FOUND


class PreconditionFailedError(OrderDeskError):
    """The order is not in a state that allows the requested transition."""
    status_code = status.HTTP_409_CONFLICT


class ServiceClosedError(PreconditionFailedError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class StorageError(OrderDeskError):
    """The backing store failed to complete a request."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class UploadError(StorageError):
    status_code = status.HTTP_502_BAD_GATEWAY


class CartAnalysisError(OrderDeskError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


async def order_desk_error_handler(request: Request, exc: OrderDeskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(OrderDeskError, order_desk_error_handler)
