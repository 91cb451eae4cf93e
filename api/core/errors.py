"""
Domain error taxonomy shared by the repositories.

The store client raises `StoreError` for every backend failure. Repositories
pass it through `translate_store_error`, which re-labels the constraint
violations they know about and leaves everything else as a plain `StoreError`.
Routers never catch these; `main.py` maps them to HTTP responses.
"""

from __future__ import annotations

# PostgreSQL SQLSTATE codes we classify.
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
INVALID_TEXT_REPRESENTATION = "22P02"


class DomainError(RuntimeError):
    kind = "error"
    http_status = 400


class StoreError(DomainError):
    """
    Backend failure, raw message preserved.
    """

    kind = "store_error"

    def __init__(
        self,
        message: str,
        *,
        sqlstate: str | None = None,
        constraint_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


class NotFoundError(DomainError):
    kind = "not_found"
    http_status = 404


class DanglingReferenceError(NotFoundError):
    kind = "dangling_reference"


class InvalidIdentifierError(DomainError):
    kind = "invalid_identifier"


class MissingRequiredFieldError(DomainError):
    kind = "missing_required_field"


class EmptyFieldError(DomainError):
    kind = "empty_field"


def _is_invalid_uuid(exc: StoreError) -> bool:
    return exc.sqlstate == INVALID_TEXT_REPRESENTATION and "type uuid" in str(exc)


def translate_store_error(exc: StoreError, *, entity: str) -> DomainError:
    """
    Map a store failure to the domain error the caller should raise.
    """
    message = str(exc)
    if _is_invalid_uuid(exc):
        # Backend text already quotes the offending literal.
        return InvalidIdentifierError(message)
    if exc.sqlstate == NOT_NULL_VIOLATION:
        return MissingRequiredFieldError(f"{entity}: {message}")
    if exc.sqlstate == CHECK_VIOLATION and (exc.constraint_name or "").endswith("_name_not_empty"):
        return EmptyFieldError(f"{entity}: {message}")
    if exc.sqlstate == FOREIGN_KEY_VIOLATION:
        return DanglingReferenceError(f"{entity}: {message}")
    return exc
