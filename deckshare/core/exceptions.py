"""Domain errors, rendered by the shared ``HTTPException`` handler."""

from fastapi import HTTPException, status


class DeckShareError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, headers: dict[str, str] | None = None) -> None:
        super().__init__(
            status_code=self.status_code, detail=detail or self.default_detail, headers=headers
        )


class UnauthenticatedError(DeckShareError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenError(DeckShareError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFoundError(DeckShareError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ValidationError(DeckShareError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid data"


class FormatError(DeckShareError):
    """Malformed portable deck payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid deck format"


class ConflictError(DeckShareError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"
