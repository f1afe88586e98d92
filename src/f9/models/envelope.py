"""Request options, metadata and the uniform response envelope"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from f9.models.types import Credentials, HttpMethod, RequestMode, ResponseType


# Type variable for generic response data
T = TypeVar("T")


@dataclass
class RequestOptions:
    """Options handed to the transport for a single request"""
    method: HttpMethod = HttpMethod.GET
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None
    credentials: Optional[Credentials] = None
    mode: Optional[RequestMode] = None


@dataclass
class Metadata:
    """
    Diagnostic and replay record attached to every envelope

    ``status``, ``message`` and ``headers`` are unset on the pre-call
    metadata handed to request interceptors.
    """
    url: str
    method: HttpMethod
    request_options: RequestOptions
    request_name: str
    response_type: ResponseType
    processing_time: float = 0.0  # milliseconds
    status: Optional[int] = None
    message: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    retry_count: int = 0


@dataclass
class ResponseEnvelope(Generic[T]):
    """Outcome of every call, successful or not"""
    success: bool
    status: int
    message: str
    metadata: Metadata
    data: Optional[T] = None
