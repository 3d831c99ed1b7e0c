"""Exception classes for the spending tracker."""

from typing import Any

import pydantic


class SpendTrackError(Exception):
    """Base exception for the spending tracker."""
    pass


class NotFoundError(SpendTrackError):
    """Raised when a transaction id does not exist."""

    def __init__(self, transaction_id: int):
        super().__init__(f"Transaction {transaction_id} not found")
        self.transaction_id = transaction_id


class ValidationError(SpendTrackError):
    """Malformed input, with one entry per failing field."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Validation error")
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Build an error for one failing field."""
        return cls([{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        """Build from a pydantic ValidationError."""
        errors = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "body"
            errors.append({"field": field, "message": err["msg"]})
        return cls(errors)


class StorageError(SpendTrackError):
    """Underlying data access failure, not otherwise classified."""
    pass
