from typing import Any, Dict, Optional


class StringAnalyzerError(Exception):
    """Base class for errors recovered at the request boundary."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class MissingFieldError(StringAnalyzerError):
    status_code = 400


class TypeMismatchError(StringAnalyzerError):
    status_code = 422


class InvalidQueryError(TypeMismatchError):
    """Malformed query parameter; reported as a bad request, not 422."""

    status_code = 400


class DuplicateValueError(StringAnalyzerError):
    status_code = 409


class StringNotFoundError(StringAnalyzerError):
    status_code = 404


class UnparseablePhraseError(StringAnalyzerError):
    status_code = 400


class ConflictingFiltersError(StringAnalyzerError):
    status_code = 422

    def __init__(self, message: str, interpreted_query: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.interpreted_query = interpreted_query or {}

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["interpreted_query"] = self.interpreted_query
        return body
