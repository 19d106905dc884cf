"""Closed description of one request made by the compose client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Union

# (field name, (filename or None, content, content type or None))
MultipartPart = Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]


class CredentialsMode(str, Enum):
    """Which requests carry the client's cookies."""

    OMIT = "omit"
    SAME_ORIGIN = "same-origin"
    INCLUDE = "include"


@dataclass(frozen=True)
class MultipartBody:
    parts: List[MultipartPart] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return [name for name, _ in self.parts]


@dataclass(frozen=True)
class JsonBody:
    payload: Any


RequestBody = Union[MultipartBody, JsonBody]


@dataclass(frozen=True)
class RequestConfig:
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[RequestBody] = None
    credentials_mode: CredentialsMode = CredentialsMode.INCLUDE


__all__ = [
    "CredentialsMode",
    "JsonBody",
    "MultipartBody",
    "MultipartPart",
    "RequestBody",
    "RequestConfig",
]
