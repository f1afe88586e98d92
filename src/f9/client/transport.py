"""
HTTP transport layer for F9Client
The transport is the only blocking point of a call
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Tuple

import requests
from requests.adapters import HTTPAdapter

from f9.client.request_builder import RequestDescriptor
from f9.models.envelope import RequestOptions
from f9.models.form_data import FormData
from f9.models.types import Credentials
from f9.utils.redact import redact_sensitive_data

# Logger for this module
logger = logging.getLogger(__name__)


class TransportResponse(Protocol):
    """What the normalizer reads from a transport result

    ``requests.Response`` satisfies this protocol.
    """
    status_code: int
    reason: str
    headers: Any
    text: str
    content: bytes

    @property
    def ok(self) -> bool:
        ...

    def json(self, **kwargs: Any) -> Any:
        ...


# Send a request, return a response or raise on network failure
Transport = Callable[[str, RequestOptions], TransportResponse]


class RequestsTransport:
    """
    Default transport backed by a pooled ``requests.Session``

    Example:
        >>> transport = RequestsTransport(timeout=10000)
        >>> response = transport("https://example.com", RequestOptions())
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            timeout: Timeout in milliseconds, None waits indefinitely
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum connections kept per pool
            session: Session to use instead of a new one
        """
        self.timeout = timeout
        self._session = session or self._create_session(pool_connections, pool_maxsize)

    def _create_session(self, pool_connections: int, pool_maxsize: int) -> requests.Session:
        """Create requests session with connection pooling"""
        session = requests.Session()

        # Retries are the caller's business, see F9Client.retry
        adapter = HTTPAdapter(
            pool_connections=pool_connections,
            pool_maxsize=pool_maxsize,
            max_retries=0,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    @property
    def session(self) -> requests.Session:
        return self._session

    def _encode_body(self, body: Any) -> Dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, FormData):
            return {"files": body.to_multipart()}
        if isinstance(body, str):
            return {"data": body.encode("utf-8")}
        return {"data": body}

    def __call__(self, url: str, options: RequestOptions) -> requests.Response:
        request = requests.Request(
            method=options.method.value,
            url=url,
            headers=options.headers,
            **self._encode_body(options.body),
        )

        # Omitted credentials: skip the session cookie jar
        if options.credentials == Credentials.OMIT:
            prepared = request.prepare()
        else:
            prepared = self._session.prepare_request(request)

        timeout = self.timeout / 1000.0 if self.timeout else None
        return self._session.send(prepared, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP session"""
        self._session.close()


def invoke(transport: Transport, request: RequestDescriptor) -> TransportResponse:
    """
    Issue a built request to the transport

    Raises whatever the transport raises; no retries happen here.
    """
    logger.debug(
        f"Sending {request.request_name} "
        f"(retry {request.retry_count}) headers="
        f"{redact_sensitive_data(request.options.headers)}"
    )
    return transport(request.url, request.options)


def iter_headers(headers: Any) -> Iterable[Tuple[str, str]]:
    """Name/value pairs of a response header collection"""
    if headers is None:
        return []
    if hasattr(headers, "items"):
        return list(headers.items())
    return list(headers)
