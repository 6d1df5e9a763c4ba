"""
Argument and result models for the HTTP client tools.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    CONNECT = "CONNECT"
    TRACE = "TRACE"


# Methods that carry a request body.
BODY_METHODS = {HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH}


class ContentType(str, Enum):
    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    TEXT = "text/plain"
    XML = "application/xml"


QueryValue = Union[str, List[str]]


class _Arguments(BaseModel):
    # Tool callers often send numbers for header/query values.
    model_config = ConfigDict(coerce_numbers_to_str=True)


class RequestDescriptor(_Arguments):
    url: Optional[str] = None
    method: HttpMethod = HttpMethod.GET
    headers: Dict[str, str] = {}
    body: Optional[str] = None
    query_params: Optional[Dict[str, QueryValue]] = None
    timeout: Optional[int] = None  # milliseconds; None means the executor default
    follow_redirects: bool = True

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class PostArguments(_Arguments):
    url: Optional[str] = None
    data: Optional[str] = None
    content_type: ContentType = ContentType.JSON
    headers: Dict[str, str] = {}


class DefaultHeadersArguments(_Arguments):
    headers: Dict[str, str]
    merge: bool = True


class ResponseEnvelope(BaseModel):
    success: bool = True
    status: int
    headers: Dict[str, str]
    body: Any = None
    url: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    type: str
    url: Optional[str] = None


class DefaultHeadersEnvelope(BaseModel):
    success: bool = True
    message: str = "Default headers updated"
    current_defaults: Dict[str, str]
