"""Application error types."""

from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError


class FieldError(BaseModel):
    """A single rejected field, named as the client sent it."""
    field: str
    message: str


class GPLError(Exception):
    """Base class for errors raised by the site's own code."""


class SubmissionValidationError(GPLError):
    """Submitted payload violates one or more field constraints."""
    
    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("Invalid fields: " + ", ".join(self.fields))
    
    @property
    def fields(self) -> List[str]:
        return sorted({e.field for e in self.errors})
    
    @classmethod
    def from_pydantic(cls, exc: ValidationError, schema: Type[BaseModel]) -> "SubmissionValidationError":
        """Convert a pydantic error, reporting fields by their public (camelCase) name."""
        public_names: Dict[str, str] = {
            name: (info.alias or name) for name, info in schema.model_fields.items()
        }
        errors = []
        for err in exc.errors():
            loc = err.get("loc") or ()
            field = public_names.get(str(loc[0]), str(loc[0])) if loc else "body"
            errors.append(FieldError(field=field, message=err.get("msg", "Invalid value")))
        return cls(errors)


class PersistenceError(GPLError):
    """The store is unreachable or rejected a read or write."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)


class DuplicateRecordError(PersistenceError):
    """A write violated a uniqueness constraint (e.g. news slug)."""
