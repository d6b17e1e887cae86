import logging
import math
import re
from typing import Any, Mapping, Optional
from app.schemas import PropertyQuery, query_fields

logger = logging.getLogger(__name__)

_NUMBER_NOISE = re.compile(r"[$,\s]")
_COUNT_FIELDS = {"bedrooms", "bathrooms"}


def to_number(value: Any) -> Optional[float]:
    """Best-effort numeric coercion. Returns None for anything that isn't a finite number."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        cleaned = _NUMBER_NOISE.sub("", value)
        if not cleaned:
            return None
        try:
            num = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return num if math.isfinite(num) else None


def _field_value(name: str, raw: Any) -> Any:
    num = to_number(raw)
    # zero/negative count as "not specified"
    if not num or num < 0:
        return None
    if name in _COUNT_FIELDS:
        if not num.is_integer():
            return None
        return int(num)
    return num


def normalize(candidate: Any) -> PropertyQuery:
    """Overlay whatever the extractor produced on the schema defaults.

    Never raises: missing, falsy, negative or non-numeric values fall back to
    the field default, so a literal 0 is treated the same as "not given".
    Fields that fell back stay out of ``model_fields_set``.
    """
    if isinstance(candidate, PropertyQuery):
        candidate = candidate.model_dump(exclude_unset=True)
    if not isinstance(candidate, Mapping):
        candidate = {}

    values = {}
    for f in query_fields():
        value = _field_value(f.name, candidate.get(f.name))
        # left out so the model fills the default and the field stays unset
        if value is not None:
            values[f.name] = value
    logger.debug(f"[NORMALIZE] {dict(candidate)} -> {values}")
    return PropertyQuery(**values)
