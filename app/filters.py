from typing import Any, Iterable, List, Mapping, Optional
from app.normalize import to_number
from app.schemas import PropertyQuery


def _record_number(record: Any, key: str) -> Optional[float]:
    if isinstance(record, Mapping):
        return to_number(record.get(key))
    return to_number(getattr(record, key, None))


def _count_ok(record: Any, key: str, query: PropertyQuery) -> bool:
    # exact match, not "at least"; a count nobody asked for matches anything
    wanted = getattr(query, key)
    if not wanted or key not in query.model_fields_set:
        return True
    return _record_number(record, key) == wanted


def _price_ok(record: Any, query: PropertyQuery) -> bool:
    if not query.min_price and not query.max_price:
        return True
    price = _record_number(record, "price")
    if price is None:
        return False
    if query.min_price and price < query.min_price:
        return False
    if query.max_price and price > query.max_price:
        return False
    return True


def matches(record: Any, query: PropertyQuery) -> bool:
    return (
        _count_ok(record, "bedrooms", query)
        and _count_ok(record, "bathrooms", query)
        and _price_ok(record, query)
    )


def filter_listings(records: Iterable[Any], query: PropertyQuery) -> List[Any]:
    """Re-apply the full query to provider results.

    The provider's own matching is approximate, so this is the authoritative
    check. Zero criteria, and bed/bath counts that were never set on the
    query, match everything. A record missing a value for an applied
    criterion is dropped. Input order is kept.

    "Set" comes from ``query.model_fields_set``, so it depends on the
    extractor leaving out keys the model did not mention. A reply that
    restates a default (``"bathrooms": 1``) makes that count apply.
    """
    return [r for r in records if matches(r, query)]
