import time
from collections.abc import Collection


def current_time_millis() -> int:
    """Milliseconds since the epoch"""
    return int(time.time() * 1000)


def generate_item_id(taken: Collection[str], now_ms: int) -> str:
    """Generate an `item-<millis>` id not present in `taken`.

    Bumps the millisecond component until the id is free, so two items
    created within the same millisecond still get distinct ids.
    """
    candidate = now_ms
    while f"item-{candidate}" in taken:
        candidate += 1
    return f"item-{candidate}"


def generate_backfill_id(index: int, taken: Collection[str], now_ms: int) -> str:
    """Generate an `item-<index>-<millis>` id for a stored item that has none"""
    candidate = now_ms
    while f"item-{index}-{candidate}" in taken:
        candidate += 1
    return f"item-{index}-{candidate}"


def generate_upload_name(extension: str, now_ms: int) -> str:
    """Generate the on-disk name of an uploaded file"""
    return f"upload-{now_ms}{extension}"
