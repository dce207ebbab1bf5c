from fastapi import HTTPException

from salon_booking.domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    SchedulingError,
    StorageError,
)


def to_http_error(e: SchedulingError) -> HTTPException:
    if isinstance(e, StorageError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ConflictError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, BusinessRuleError):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))
