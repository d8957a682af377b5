"""Custom exception hierarchy for the QA corpus tool."""

from __future__ import annotations

from typing import List, Optional

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class DocumentValidationError(ApplicationError):
    """A document (or a batch of them) is missing required fields."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        fields: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        # 1-based position inside the submitted batch, when known.
        self.index = index
        self.fields = list(fields or [])


class InvalidDocumentIdError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_id"


class StoreError(ApplicationError):
    """Raised when the document store cannot be reached or rejects an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"
