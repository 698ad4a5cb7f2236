"""
Declarative field mapping from raw provider records to canonical records.

A field map is an ordered mapping of canonical field name to a source:
a raw key, a tuple of raw keys tried in order, or a callable taking the raw
record. Every canonical record also receives the literal platform tag.
"""

from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

Source = Union[str, Tuple[str, ...], Callable[[Mapping[str, Any]], Any]]
FieldMap = Mapping[str, Source]

SEARCH_DESCRIPTION_LIMIT = 200


def field_map(**fields: Source) -> FieldMap:
    """Build an immutable field map preserving declaration order."""
    return MappingProxyType(dict(fields))


def first_of(*keys: str) -> Callable[[Mapping[str, Any]], Any]:
    """Source returning the first present, non-empty value among keys."""
    def _pick(raw: Mapping[str, Any]) -> Any:
        for key in keys:
            value = raw.get(key)
            if value not in (None, ""):
                return value
        return None
    return _pick


def truncated(source: Source, limit: int = SEARCH_DESCRIPTION_LIMIT) -> Callable[[Mapping[str, Any]], Any]:
    """Source that cuts text produced by another source to limit characters."""
    def _cut(raw: Mapping[str, Any]) -> Any:
        value = resolve(raw, source)
        if isinstance(value, str):
            return value[:limit]
        return value
    return _cut


def resolve(raw: Mapping[str, Any], source: Source) -> Any:
    """Read one canonical value out of a raw record."""
    if callable(source):
        return source(raw)
    if isinstance(source, tuple):
        return first_of(*source)(raw)
    return raw.get(source)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def normalize_record(raw: Mapping[str, Any], fields: FieldMap, platform: str) -> Dict[str, Any]:
    """
    Map a raw provider record onto a canonical record.

    Args:
        raw: Record as returned by the provider client
        fields: Canonical field map for the operation and platform
        platform: Literal platform tag added to the record

    Returns:
        Dict[str, Any]: Canonical record; missing raw values become None
    """
    record = {name: _jsonable(resolve(raw, source)) for name, source in fields.items()}
    record["platform"] = platform
    return record


def normalize_records(
    raws: Iterable[Mapping[str, Any]],
    fields: FieldMap,
    platform: str,
    limit: Optional[int] = None
) -> List[Dict[str, Any]]:
    """Map a sequence of raw records, keeping at most limit entries."""
    records = list(raws)
    if limit is not None:
        records = records[:limit]
    return [normalize_record(raw, fields, platform) for raw in records]
