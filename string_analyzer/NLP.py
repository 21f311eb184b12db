import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .errors import UnparseablePhraseError
from .schemas import FilterSet

_PALINDROME = re.compile(r'palindrom')
_SINGLE_WORD = re.compile(r'\b(?:single|one)\b.*\bword\b|\bword count is 1\b')
_N_WORDS = re.compile(r'\b(\d+)\s+words?\b')
_LONGER_THAN = re.compile(r'\blonger\s+than\s+(\d+)')
_SHORTER_THAN = re.compile(r'\b(?:shorter|less)\s+than\s+(\d+)')
_CONTAINS_LETTER = re.compile(r'\bcontain(?:s|ing)?(?:\s+the)?(?:\s+letter)?\s+([a-z])\b')


@dataclass(frozen=True)
class Recognizer:
    """A phrase pattern and the filter fields it yields when it fires."""
    name: str
    detect: Callable[[str], Optional[re.Match]]
    extract: Callable[[re.Match], Dict[str, Any]]


def _detect_word_count(q: str) -> Optional[re.Match]:
    # "<N> words" wins over "single/one word" when both are present
    return _N_WORDS.search(q) or _SINGLE_WORD.search(q)


def _extract_word_count(m: re.Match) -> Dict[str, Any]:
    if m.re is _N_WORDS:
        return {'word_count': int(m.group(1))}
    return {'word_count': 1}


RECOGNIZERS: List[Recognizer] = [
    Recognizer('palindrome', _PALINDROME.search, lambda m: {'is_palindrome': True}),
    Recognizer('word_count', _detect_word_count, _extract_word_count),
    Recognizer('longer_than', _LONGER_THAN.search, lambda m: {'min_length': int(m.group(1)) + 1}),
    Recognizer('shorter_than', _SHORTER_THAN.search, lambda m: {'max_length': int(m.group(1)) - 1}),
    Recognizer('contains_letter', _CONTAINS_LETTER.search, lambda m: {'contains_character': m.group(1)}),
]


@dataclass(frozen=True)
class Interpretation:
    original: str
    parsed_filters: FilterSet
    matched: List[str]

    @property
    def conflicting(self) -> bool:
        return self.parsed_filters.is_conflicting()

    def to_dict(self) -> Dict[str, Any]:
        return {'original': self.original, 'parsed_filters': self.parsed_filters.applied()}


def interpret_nl_query(query: str, recognizers: Optional[List[Recognizer]] = None) -> Interpretation:
    """Interpret a natural language filter query into structured filters.

    Recognizers run independently, in order, over the lowercased phrase; their
    fields merge with later recognizers overwriting earlier ones. Raises
    UnparseablePhraseError when none of them fire.
    """
    if not isinstance(query, str):
        raise TypeError("query must be a string")

    q = query.lower()
    filters: Dict[str, Any] = {}
    matched: List[str] = []

    for recognizer in RECOGNIZERS if recognizers is None else recognizers:
        m = recognizer.detect(q)
        if m is None:
            continue
        filters.update(recognizer.extract(m))
        matched.append(recognizer.name)

    if not filters:
        raise UnparseablePhraseError("Unable to parse natural language query")

    return Interpretation(original=query, parsed_filters=FilterSet(**filters), matched=matched)
