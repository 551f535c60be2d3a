from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional


def normalize_optional_str(value: Optional[Any]) -> Optional[str]:
    """Return a trimmed string or ``None`` when the input is blank.

    ``None`` inputs as well as strings consisting only of whitespace are
    normalized to ``None`` so callers can treat "missing" and "blank" the
    same way. Non-string values are converted to strings before trimming.
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
    else:
        stripped = str(value).strip()
    return stripped or None


def parse_subjects(value: Optional[Any]) -> List[str]:
    """Normalise a subjects field into a list of non-empty tags.

    Profiles store subjects as a list, but CSV seeds and older documents
    carry a single comma or semicolon separated string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw: Iterable[Any] = value.replace(";", ",").split(",")
    elif isinstance(value, (list, tuple, set)):
        raw = value
    else:
        return []
    subjects: List[str] = []
    for item in raw:
        tag = normalize_optional_str(item)
        if tag and tag not in subjects:
            subjects.append(tag)
    return subjects


def utc_now_iso() -> str:
    """Timestamp used for ``createdAt`` fields; ISO strings sort chronologically."""
    return datetime.now(timezone.utc).isoformat()
