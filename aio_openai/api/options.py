"""
Per-request options: extra query parameters and headers.

Each resource client carries a RequestOptions value which is merged into
every request it sends, after the configuration's own query and headers.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel

from ..errors import InvalidArgumentError

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], BaseModel]


@dataclass(frozen=True)
class RequestOptions:
    """
    Immutable set of query parameters and headers.

    ``with_*`` methods return a new instance; query parameters accumulate in
    order, headers are merged with later values replacing earlier ones.
    """

    query: Tuple[Tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)

    def with_query(self, query: QueryParams) -> "RequestOptions":
        """
        Append query parameters.

        Args:
            query: Mapping, sequence of pairs or pydantic model. None values are
                skipped, booleans become "true"/"false", lists repeat the key.

        Raises:
            InvalidArgumentError: If a value cannot be encoded
        """
        return replace(self, query=self.query + tuple(_query_pairs(query)))

    def with_header(self, key: str, value: str) -> "RequestOptions":
        """
        Set a header.

        Raises:
            InvalidArgumentError: If the name or value contains line breaks
        """
        _check_header(key, value)
        headers = dict(self.headers)
        headers[key] = value
        return replace(self, headers=headers)

    def with_headers(self, headers: Mapping[str, str]) -> "RequestOptions":
        """Merge several headers."""
        merged = dict(self.headers)
        for key, value in headers.items():
            _check_header(key, value)
            merged[key] = value
        return replace(self, headers=merged)


def _query_pairs(query: QueryParams) -> List[Tuple[str, str]]:
    if isinstance(query, BaseModel):
        query = query.model_dump(mode="json", exclude_none=True, by_alias=True)
    items = query.items() if isinstance(query, Mapping) else query

    pairs = []
    try:
        for key, value in items:
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                pairs.extend((str(key), _query_value(item)) for item in value)
            else:
                pairs.append((str(key), _query_value(value)))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid query: {e}") from e
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"unsupported query value of type {type(value).__name__}")


def _check_header(key: str, value: Any) -> None:
    if not isinstance(key, str) or not key or any(c in key for c in "\r\n: "):
        raise InvalidArgumentError(f"Invalid header name: {key!r}")
    if not isinstance(value, str) or "\r" in value or "\n" in value:
        raise InvalidArgumentError(f"Invalid header value: {value!r}")


def merge_headers(*sources: Mapping[str, str]) -> Dict[str, str]:
    """Merge header mappings case-insensitively, later sources win."""
    merged: Dict[str, str] = {}
    names: Dict[str, str] = {}
    for source in sources:
        for key, value in source.items():
            previous = names.get(key.lower())
            if previous is not None and previous != key:
                del merged[previous]
            names[key.lower()] = key
            merged[key] = value
    return merged
