"""
F9 HTTP client
Wraps a transport so that every call, successful or not, returns a
ResponseEnvelope; adds auth header injection, header merging, request and
response interceptors, per-status listeners and manual retry
"""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Union,
)

from f9.client.auth import CredentialStore, DEFAULT_AUTH_HEADER, build_auth_header
from f9.client.normalizer import build_metadata, execute
from f9.client.request_builder import (
    CallParams,
    RequestDescriptor,
    build_request,
    build_request_name,
    parse_call_params,
    to_method,
    to_response_type,
)
from f9.client.transport import RequestsTransport, Transport
from f9.config.client_config import ClientConfig
from f9.exceptions import ValidationError
from f9.models.auth import BasicAuth, BearerAuth
from f9.models.envelope import Metadata, RequestOptions, ResponseEnvelope
from f9.models.types import Credentials, HttpMethod, ResponseType
from f9.utils.redact import redact_sensitive_data


# Logger for this module
logger = logging.getLogger(__name__)

# Status listener key matching every status
WILDCARD = "*"

# Receives pre-call metadata
RequestInterceptor = Callable[[Metadata], Any]

# Receives the final envelope
ResponseInterceptor = Callable[[ResponseEnvelope], Any]

# Receives the envelope; a non-None return replaces it
StatusListener = Callable[[ResponseEnvelope], Optional[ResponseEnvelope]]


@dataclass
class HttpAuditEntry:
    """Audit log entry for a completed call"""
    timestamp: str
    request_name: str
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[Any] = None
    status: int = 0
    duration: float = 0.0  # milliseconds
    success: bool = False
    error: Optional[str] = None
    retry_count: int = 0


class F9Client:
    """
    HTTP client returning a uniform envelope for every outcome

    Features:
    - Success, HTTP errors and transport failures share one envelope shape
    - Bearer/Basic auth header derived once at construction
    - Client default headers merged with per-call headers
    - Request/response interceptors, global or per call
    - Status listeners that may substitute the returned envelope
    - Manual retry from an envelope's metadata

    Listener and interceptor exceptions are not caught: they propagate to
    the caller of the call that triggered them.

    Example:
        >>> client = F9Client(base_path="https://api.example.com")
        >>> result = client.get("/users/1")
        >>> if result.success:
        ...     print(result.data)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[Transport] = None,
        credential_store: Optional[CredentialStore] = None,
        on_request: Optional[RequestInterceptor] = None,
        on_response: Optional[ResponseInterceptor] = None,
        **options: Any,
    ) -> None:
        """
        Create a new client

        Args:
            config: Resolved client configuration
            transport: Callable sending a request; defaults to RequestsTransport
            credential_store: Lookup for Bearer tokens given by key
            on_request: Client-level request interceptor
            on_response: Client-level response interceptor
            options: ClientConfig fields overriding config (base_path, auth,
                credentials, ...)
        """
        if config is None:
            config = ClientConfig(**options)
        elif options:
            config = ClientConfig(**{**config.model_dump(), **options})
        self.config = config

        self._base_path = config.base_path
        self._credentials = config.credentials
        self._auth = config.auth
        self._headers: Dict[str, str] = {
            **config.default_headers,
            **build_auth_header(config.auth, credential_store),
        }

        self._on_request = on_request
        self._on_response = on_response
        self._status_listeners: Dict[Union[int, str], StatusListener] = {}

        # Audit logging callback
        self._audit_log_callback: Optional[Callable[[HttpAuditEntry], None]] = None

        self._owns_transport = transport is None
        self._transport: Transport = transport or RequestsTransport(
            timeout=config.timeout,
            pool_connections=config.pool_connections,
            pool_maxsize=config.pool_maxsize,
        )

    # Configuration

    @property
    def base_path(self) -> str:
        """Get base path"""
        return self._base_path

    @property
    def headers(self) -> Dict[str, str]:
        """Copy of the default headers, auth header included"""
        return dict(self._headers)

    @property
    def auth(self) -> Optional[Union[BearerAuth, BasicAuth]]:
        return self._auth

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    def set_headers(self, headers: Optional[Mapping[str, str]] = None) -> None:
        """Merge headers into the client defaults"""
        self._headers = {**self._headers, **(headers or {})}

    def set_authorization(self, value: str) -> None:
        """Set the Authorization default header verbatim"""
        self._headers[DEFAULT_AUTH_HEADER] = value

    def set_credentials(self, policy: Optional[Union[str, Credentials]]) -> None:
        """Set the default credentials policy"""
        try:
            self._credentials = Credentials(policy) if policy is not None else None
        except ValueError:
            raise ValidationError(
                f"Unsupported credentials policy: {policy}", field="credentials"
            ) from None

    def on_request(self, fn: Optional[RequestInterceptor]) -> None:
        """Set the client-level request interceptor"""
        self._on_request = fn

    def on_response(self, fn: Optional[ResponseInterceptor]) -> None:
        """Set the client-level response interceptor"""
        self._on_response = fn

    def on_status(self, status: Union[int, str], fn: StatusListener) -> None:
        """
        Register the listener for a status code, or ``"*"`` for every status

        One listener per key; registering again replaces it.
        """
        if status != WILDCARD and (isinstance(status, bool) or not isinstance(status, int)):
            raise ValidationError(
                f"Status listener key must be an int or '{WILDCARD}', got {status!r}",
                field="status",
            )
        self._status_listeners[status] = fn

    def set_audit_log_callback(
        self, callback: Optional[Callable[[HttpAuditEntry], None]]
    ) -> None:
        """Set audit log callback"""
        self._audit_log_callback = callback

    # Pipeline

    def _create_audit_entry(self, envelope: ResponseEnvelope) -> HttpAuditEntry:
        """Create audit log entry"""
        metadata = envelope.metadata

        # JSON bodies are already encoded; decode so their fields get redacted
        body = metadata.request_options.body
        if isinstance(body, str):
            try:
                body = json.loads(body)
            except ValueError:
                pass

        return HttpAuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_name=metadata.request_name,
            method=metadata.method.value,
            url=metadata.url,
            headers=redact_sensitive_data(dict(metadata.request_options.headers)),
            body=redact_sensitive_data(body),
            status=envelope.status,
            duration=metadata.processing_time,
            success=envelope.success,
            error=None if envelope.success else envelope.message,
            retry_count=metadata.retry_count,
        )

    def _log_audit(self, envelope: ResponseEnvelope) -> None:
        """Log audit entry"""
        if self.config.enable_audit_log and self._audit_log_callback:
            self._audit_log_callback(self._create_audit_entry(envelope))

    def _dispatch_status(self, envelope: ResponseEnvelope) -> ResponseEnvelope:
        """Run the wildcard listener, then the listener for the exact status"""
        wildcard = self._status_listeners.get(WILDCARD)
        if wildcard is not None:
            wildcard(envelope)

        listener = self._status_listeners.get(envelope.status)
        if listener is not None:
            replacement = listener(envelope)
            if replacement is not None:
                return replacement

        return envelope

    def _call(self, call: CallParams) -> ResponseEnvelope[Any]:
        request = build_request(
            call,
            base_path=self._base_path,
            default_headers=self._headers,
            credentials=self._credentials,
            mode=self.config.mode,
            default_response_type=self.config.response_type,
        )

        on_request = call.on_request or self._on_request
        if on_request is not None:
            on_request(build_metadata(request))

        envelope = execute(self._transport, request)

        result: ResponseEnvelope[Any] = envelope
        try:
            self._log_audit(envelope)

            # Replayed calls never reach the listeners again
            if request.retry_count == 0:
                result = self._dispatch_status(envelope)
        finally:
            on_response = call.on_response or self._on_response
            if on_response is not None:
                on_response(result)

        return result

    def request(
        self,
        method: Union[str, HttpMethod],
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """
        Perform a request with any supported method

        Args:
            method: HTTP method
            path: Absolute URL or path relative to the base path
            params: headers, body, credentials, options (mode,
                response_type), on_request, on_response; any other key is
                sent as a body field
            fields: Merged into params

        Returns:
            Response envelope

        Raises:
            ValidationError: Unknown method, credentials, mode or response type
            TypeError: JSON body that json.dumps cannot encode
        """
        merged = {**(params or {}), **fields}
        return self._call(parse_call_params(method, path, merged))

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """
        Perform GET request

        Args:
            path: Absolute URL or path relative to the base path
            params: Call parameters, see request()

        Returns:
            Response envelope
        """
        return self.request(HttpMethod.GET, path, params, **fields)

    def post(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """Perform POST request"""
        return self.request(HttpMethod.POST, path, params, **fields)

    def put(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """Perform PUT request"""
        return self.request(HttpMethod.PUT, path, params, **fields)

    def patch(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """Perform PATCH request"""
        return self.request(HttpMethod.PATCH, path, params, **fields)

    def delete(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ) -> ResponseEnvelope[Any]:
        """Perform DELETE request, body included like the other write methods"""
        return self.request(HttpMethod.DELETE, path, params, **fields)

    def raw(
        self,
        url: str,
        options: Optional[RequestOptions] = None,
        response_type: Union[str, ResponseType] = ResponseType.JSON,
    ) -> ResponseEnvelope[Any]:
        """
        Send a fully built request

        No base path, auth, default headers, interceptors or status
        listeners are applied.

        Args:
            url: Full request URL
            options: Wire options; a JSON GET when omitted
            response_type: Reader for a successful response body
        """
        if options is None:
            options = RequestOptions(
                method=HttpMethod.GET,
                headers={"Content-Type": "application/json"},
            )
        else:
            options = replace(options, method=to_method(options.method))

        request = RequestDescriptor(
            url=url,
            options=options,
            response_type=to_response_type(response_type),
            request_name=build_request_name(options.method, url),
        )
        return execute(self._transport, request)

    def retry(self, envelope: ResponseEnvelope) -> ResponseEnvelope[Any]:
        """
        Replay the request behind an envelope

        The replay runs interceptors but skips status listeners, so a
        listener may call retry() without triggering itself again. Nothing
        bounds the number of manual retries.

        Args:
            envelope: Envelope returned by an earlier call

        Returns:
            Envelope of the replay, metadata.retry_count incremented by one
        """
        metadata = getattr(envelope, "metadata", None)
        if not isinstance(metadata, Metadata):
            raise ValidationError(
                "retry() needs an envelope returned by this client", field="envelope"
            )

        options = metadata.request_options
        call = CallParams(
            method=metadata.method,
            path=metadata.url,
            headers=dict(options.headers),
            body=options.body,
            has_body=options.body is not None,
            credentials=options.credentials,
            mode=options.mode,
            response_type=metadata.response_type,
            retry_count=metadata.retry_count + 1,
            replay=True,
        )
        logger.info(f"Retrying {metadata.request_name} (retry {call.retry_count})")
        return self._call(call)

    def close(self) -> None:
        """Close the transport if this client created it"""
        if self._owns_transport and hasattr(self._transport, "close"):
            self._transport.close()

    def __enter__(self) -> "F9Client":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()
