class StorageError(Exception):
    """Raised when the order store itself fails (not for missing orders)."""


class StorageCapacityError(StorageError):
    """Raised by a bounded in-memory store that cannot accept another order."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Order store is full (capacity={capacity})")


def format_validation_errors(errors) -> str:
    """
    One human-readable line for a list of pydantic error dicts, e.g.
    'Validation error: Name must be at least 2 characters at "customerName"'.
    """
    parts = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        # Drop the leading "body"/"query" marker FastAPI adds to the location
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        parts.append(f'{message} at "{".".join(loc)}"' if loc else message)
    return "Validation error: " + "; ".join(parts)
