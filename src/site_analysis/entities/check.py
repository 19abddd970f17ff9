"""Check descriptor entities.

Every analysis check is one row of data: which query parameters it
takes, how long its answers are cached, and which coroutine talks to
the upstream source. The service layer runs any row the same way.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class QueryParam:
    """A query parameter accepted by a check.

    Attributes:
        name: Query-string name (``domain``, ``url``, ``type``)
        label: Name used in validation messages (``Domain``, ``URL``)
        required: Whether an absent or empty value is rejected
        default: Value substituted when an optional parameter is absent
        choices: Allowed values, if the parameter is an enum
    """

    name: str
    label: str
    required: bool = True
    default: str | None = None
    choices: tuple[str, ...] | None = None


@dataclass(frozen=True)
class CheckContext:
    """What a check's upstream coroutine is given to do its work.

    Attributes:
        http: Shared outbound HTTP client
        clock: Returns the current UTC time (overridable in tests)
    """

    http: httpx.AsyncClient
    clock: Callable[[], datetime] = utc_now


# (context, resolved params) -> result data model
FetchFn = Callable[[CheckContext, dict[str, str]], Awaitable[Any]]


@dataclass(frozen=True)
class CheckDefinition:
    """Descriptor for one cache-fronted check.

    Attributes:
        name: Check name, also the first segment of the cache key
        params: Query parameters in cache-key order
        ttl: Cache lifetime of a successful answer in seconds
        fetch: Coroutine performing the upstream call(s) and mapping
        default_error: Message used when a failure carries none
    """

    name: str
    params: tuple[QueryParam, ...]
    ttl: int
    fetch: FetchFn = field(repr=False)
    default_error: str = "Check failed"

    def validate(self, raw: dict[str, str | None]) -> tuple[dict[str, str] | None, str | None]:
        """Resolve raw query values against the parameter list.

        Returns:
            ``(params, None)`` when valid, ``(None, message)`` otherwise
        """
        resolved: dict[str, str] = {}
        for param in self.params:
            value = raw.get(param.name)
            if not value:
                if param.required:
                    return None, f"{param.label} parameter is required"
                if param.default is None:
                    continue
                value = param.default
            if param.choices is not None and value not in param.choices:
                return None, f"{param.label} parameter must be one of {', '.join(param.choices)}"
            resolved[param.name] = value
        return resolved, None

    def cache_key(self, params: dict[str, str]) -> str:
        """Build the cache key from raw parameter values, in declared order."""
        parts = [self.name]
        parts.extend(params[p.name] for p in self.params if p.name in params)
        return ":".join(parts)


@dataclass(frozen=True)
class CachedBody:
    """A serialized response body and whether it came from the cache."""

    body: str
    hit: bool

    @property
    def cache_status(self) -> str:
        return "HIT" if self.hit else "MISS"
