from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from .db import StringStore, get_store
from .schemas import (
    FilterResponse,
    NaturalLanguageFilterResponse,
    StringRecord,
    StringRequest,
)
from .services import (
    create_string,
    get_string_by_value,
    delete_string_by_value,
    get_all_strings_with_filters,
    get_strings_by_natural_language,
)

router = APIRouter()


@router.get("/")
@router.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post("/strings", response_model=StringRecord, status_code=201)
def create_string_endpoint(payload: StringRequest, store: StringStore = Depends(get_store)) -> StringRecord:
    """Create and analyze a string."""
    return create_string(payload.value, store)


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageFilterResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Free-text filter, e.g. 'single word palindromes'"),
    store: StringStore = Depends(get_store),
) -> dict:
    """Filter strings using a natural language query."""
    return get_strings_by_natural_language(store, query)


@router.get("/strings", response_model=FilterResponse)
def get_all_strings(request: Request, store: StringStore = Depends(get_store)) -> dict:
    """Get all strings with optional filtering.

    Recognized query parameters: is_palindrome, min_length, max_length,
    word_count, contains_character. They are validated from their raw string
    form so that malformed values are rejected rather than coerced.
    """
    return get_all_strings_with_filters(store, request.query_params)


@router.get("/strings/{string_value:path}", response_model=StringRecord)
def get_string_endpoint(string_value: str, store: StringStore = Depends(get_store)) -> StringRecord:
    """Get a specific string by its exact value."""
    return get_string_by_value(string_value, store)


@router.delete("/strings/{string_value:path}", status_code=204)
def delete_string_endpoint(string_value: str, store: StringStore = Depends(get_store)) -> Response:
    """Delete a string by value (case-insensitive)."""
    delete_string_by_value(string_value, store)
    return Response(status_code=204)
