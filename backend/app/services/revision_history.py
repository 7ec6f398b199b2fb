"""Grouping of revisions into calendar days for the wiki history view."""
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

DATE_FORMAT = "%Y-%m-%d"


def _get(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _to_utc(value: Union[datetime, str]) -> datetime:
    if isinstance(value, str):
        # fromisoformat does not accept a trailing Z before 3.11
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        # Naive timestamps are stored as UTC
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def revision_date_key(revision: Any) -> Optional[str]:
    """
    Day a revision belongs to: approved_on, else rejected_on, else created_at.

    All three are normalised to UTC before truncation so a revision never
    lands on a different day depending on which timestamp was picked.
    """
    approved_on = _get(revision, "approved_on")
    if approved_on:
        stamp = approved_on
    else:
        rejected_on = _get(revision, "rejected_on")
        stamp = rejected_on if rejected_on else _get(revision, "created_at")
    if not stamp:
        return None
    return _to_utc(stamp).strftime(DATE_FORMAT)


def group_revisions_by_date(revisions: Iterable[Any]) -> Dict[str, List[Any]]:
    """
    Bucket revisions by ``revision_date_key``.

    Works on ORM rows, pydantic views or plain dicts. Groups appear in the order
    their first member was seen and members keep their input order.
    """
    groups: Dict[str, List[Any]] = {}
    for revision in revisions:
        key = revision_date_key(revision)
        groups.setdefault(key, []).append(revision)
    return groups
