import uuid


def new_id() -> str:
    return uuid.uuid4().hex


def parse_id(raw: str) -> str | None:
    """Normalize a record id to 32-char lowercase hex, or None if malformed."""
    try:
        return uuid.UUID(raw.strip()).hex
    except (ValueError, AttributeError):
        return None
