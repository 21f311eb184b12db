from pydantic import BaseModel, StrictStr
from datetime import datetime
from typing import Dict, Any, Optional, List


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string."""
    value: StrictStr


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""
    model_config = {"frozen": True}

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    """A stored string together with its derived properties."""
    model_config = {"frozen": True}

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterSet(BaseModel):
    """Partial set of filter predicates; unset fields impose no constraint."""
    model_config = {"frozen": True}

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        """Only the populated fields, as reported back to clients."""
        return self.model_dump(exclude_none=True)

    def is_conflicting(self) -> bool:
        if self.min_length is None or self.max_length is None:
            return False
        return self.min_length > self.max_length


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class FilterResponse(BaseModel):
    """Response schema for structured filtering."""
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any]


class NaturalLanguageFilterResponse(BaseModel):
    """Response schema for natural language filtering."""
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery
