import logging
from hashlib import sha256
from typing import Dict, Any, Mapping, Optional
from datetime import datetime, timezone

from .db import StringStore
from .errors import (
    ConflictingFiltersError,
    DuplicateValueError,
    MissingFieldError,
    StringNotFoundError,
    TypeMismatchError,
)
from .filters import apply_filters, parse_query_filters
from .NLP import interpret_nl_query
from .schemas import StringProperties, StringRecord

logger = logging.getLogger("string_analyzer.services")


def _compute_properties(value: str) -> StringProperties:
    """Counts are per code point, not UTF-16 units: an emoji has length 1."""
    hash_val = sha256(value.encode("utf-8", "surrogatepass")).hexdigest()

    freq: Dict[str, int] = {}
    for c in value:
        freq[c] = freq.get(c, 0) + 1

    lower = value.lower()
    return StringProperties(
        length=len(value),
        is_palindrome=lower == lower[::-1],
        unique_characters=len(freq),
        word_count=len(value.split()),
        sha256_hash=hash_val,
        character_frequency_map=freq,
    )


def analyze(value: str) -> StringRecord:
    """Derive the properties of ``value`` and wrap them in a new record."""
    props = _compute_properties(value)
    return StringRecord(
        id=props.sha256_hash,
        value=value,
        properties=props,
        created_at=datetime.now(timezone.utc),
    )


def create_string(value: str, store: StringStore) -> StringRecord:
    if value == "":
        raise MissingFieldError('"value" must be a non-empty string')
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise TypeMismatchError('"value" must be valid UTF-8 text') from None

    with store.lock:
        if store.find_exact(value) is not None:
            logger.info("Rejected duplicate string %r", value)
            raise DuplicateValueError("String already exists in the system")
        record = analyze(value)
        store.insert(record)

    logger.info("Stored string %s (length=%d)", record.id[:12], record.properties.length)
    return record


def get_string_by_value(string_value: str, store: StringStore) -> StringRecord:
    """Exact, case-sensitive lookup."""
    record = store.find_exact(string_value)
    if record is None:
        raise StringNotFoundError("String does not exist in the system")
    return record


def delete_string_by_value(string_value: str, store: StringStore) -> None:
    """Remove the first record matching ``string_value`` ignoring case."""
    with store.lock:
        idx = store.find_by_value_ci(string_value)
        if idx is None:
            raise StringNotFoundError("String does not exist in the system")
        removed = store.remove_at(idx)
    logger.info("Deleted string %s", removed.id[:12])


def get_all_strings_with_filters(store: StringStore, raw_query: Mapping[str, str]) -> Dict[str, Any]:
    filters = parse_query_filters(raw_query)
    records = apply_filters(store.all(), filters)
    return {
        "data": records,
        "count": len(records),
        "filters_applied": filters.applied(),
    }


def get_strings_by_natural_language(store: StringStore, query: Optional[str]) -> Dict[str, Any]:
    if query is None or not query.strip():
        raise MissingFieldError('Missing "query" parameter')

    interpretation = interpret_nl_query(query)
    logger.debug("Interpreted %r via %s", query, ", ".join(interpretation.matched))

    if interpretation.conflicting:
        raise ConflictingFiltersError(
            "Query parsed but resulted in conflicting filters",
            interpreted_query=interpretation.to_dict(),
        )

    records = apply_filters(store.all(), interpretation.parsed_filters)
    return {
        "data": records,
        "count": len(records),
        "interpreted_query": interpretation.to_dict(),
    }
