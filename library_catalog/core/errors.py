"""Domain errors raised by the catalog services."""

from fastapi import status


class CatalogError(Exception):
    """Base error carrying a single human-readable message."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogValidationError(CatalogError):
    """Malformed, missing or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnknownReferenceError(CatalogError):
    """A referenced author or genre does not exist."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, missing_ids: list[int] | None = None) -> None:
        super().__init__(message)
        self.missing_ids = missing_ids or []


class NotFoundError(CatalogError):
    """The target entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str, entity_id: int) -> "NotFoundError":
        return cls(f"{entity} with id {entity_id} was not found.")


class ConflictError(CatalogError):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT
