"""
HTTP Client module for f9
"""

from f9.client.auth import (
    CredentialStore,
    EnvironmentCredentialStore,
    build_auth_header,
)
from f9.client.http_client import (
    F9Client,
    HttpAuditEntry,
    RequestInterceptor,
    ResponseInterceptor,
    StatusListener,
    WILDCARD,
)
from f9.client.request_builder import CallParams, RequestDescriptor
from f9.client.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "CredentialStore",
    "EnvironmentCredentialStore",
    "build_auth_header",
    "F9Client",
    "HttpAuditEntry",
    "RequestInterceptor",
    "ResponseInterceptor",
    "StatusListener",
    "WILDCARD",
    "CallParams",
    "RequestDescriptor",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]
