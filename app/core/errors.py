from typing import Any, Optional


class InventoryError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": self.message}


class ValidationError(InventoryError):
    status_code = 400
    default_message = "Validation Error"

    def __init__(self, message: Optional[str] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFound(InventoryError):
    status_code = 404
    default_message = "Product not found"


class DuplicateName(InventoryError):
    status_code = 400
    default_message = "Product name already exists"


class NoFileProvided(InventoryError):
    status_code = 400
    default_message = "No file uploaded"


class StoreFailure(InventoryError):
    status_code = 500


def is_unique_violation(exc: Exception) -> bool:
    orig = getattr(exc, "orig", exc)
    text = str(orig).lower()
    return "unique" in text or "duplicate" in text


__all__ = [
    "DuplicateName",
    "InventoryError",
    "NoFileProvided",
    "NotFound",
    "StoreFailure",
    "ValidationError",
    "is_unique_violation",
]
