"""Domain entities for internal representation.

These are frozen dataclasses used internally by the service layer and
the check definitions. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .check import CachedBody, CheckContext, CheckDefinition, QueryParam
from .result import Err, Ok, Result

__all__ = [
    "CachedBody",
    "CheckContext",
    "CheckDefinition",
    "QueryParam",
    "Ok",
    "Err",
    "Result",
]
