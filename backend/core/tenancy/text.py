from typing import Iterable


def split_csv(raw) -> list[str]:
    """Split a comma-separated string (or an iterable) into trimmed, non-empty items."""

    if not raw:
        return []
    if isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        items = str(raw).split(",")
    return [str(item).strip() for item in items if str(item).strip()]


def join_csv(items: Iterable[str]) -> str:
    return ",".join(split_csv(list(items)))
