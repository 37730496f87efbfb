from datetime import datetime, timezone

from pydantic import BaseModel


def now_utc_naive() -> datetime:
    """Current UTC time without tzinfo, as stored in timestamp columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def reject_explicit_nulls(model: BaseModel, *fields: str) -> None:
    """Raise if any of the given fields was explicitly set to None."""
    nulled = [
        name
        for name in fields
        if name in model.model_fields_set and getattr(model, name) is None
    ]
    if nulled:
        raise ValueError(f"{', '.join(nulled)} may not be null")


LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """LIKE pattern matching `term` anywhere, with its wildcards taken literally."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"
