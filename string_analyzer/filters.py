import re
from typing import Iterable, List, Mapping, Optional

from .errors import InvalidQueryError
from .schemas import FilterSet, StringRecord

_INT_RE = re.compile(r'^[+-]?[0-9]+$')
_INT_FIELDS = ("min_length", "max_length", "word_count")


def _matches_filters(record: StringRecord, filters: FilterSet) -> bool:
    props = record.properties

    if filters.is_palindrome is not None:
        if props.is_palindrome != filters.is_palindrome:
            return False

    if filters.min_length is not None:
        if props.length < filters.min_length:
            return False

    if filters.max_length is not None:
        if props.length > filters.max_length:
            return False

    if filters.word_count is not None:
        if props.word_count != filters.word_count:
            return False

    if filters.contains_character is not None:
        if filters.contains_character.lower() not in record.value.lower():
            return False

    return True


def apply_filters(records: Iterable[StringRecord], filters: FilterSet) -> List[StringRecord]:
    """Keep records satisfying every populated predicate, in their original order."""
    return [r for r in records if _matches_filters(r, filters)]


def _parse_int(name: str, raw: str) -> int:
    if not _INT_RE.match(raw.strip()):
        raise InvalidQueryError(f"{name} must be an integer")
    return int(raw.strip())


def parse_query_filters(raw_query: Mapping[str, str]) -> FilterSet:
    """Validate raw query parameters and convert them into a FilterSet.

    Every provided field must validate; a single bad field rejects the whole
    request. Unknown parameters are ignored.
    """
    fields: dict = {}

    is_palindrome: Optional[str] = raw_query.get("is_palindrome")
    if is_palindrome is not None:
        if is_palindrome not in ("true", "false"):
            raise InvalidQueryError('is_palindrome must be "true" or "false"')
        fields["is_palindrome"] = is_palindrome == "true"

    for name in _INT_FIELDS:
        raw = raw_query.get(name)
        if raw is not None:
            fields[name] = _parse_int(name, raw)

    contains_character = raw_query.get("contains_character")
    if contains_character is not None:
        if len(contains_character) != 1:
            raise InvalidQueryError("contains_character must be a single character")
        fields["contains_character"] = contains_character.lower()

    return FilterSet(**fields)
