"""
Request builder
Pure functions turning a high-level call into a wire request
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from f9.exceptions import ValidationError
from f9.models.envelope import RequestOptions
from f9.models.form_data import FormData
from f9.models.types import (
    BODY_METHODS,
    Credentials,
    HttpMethod,
    RequestMode,
    ResponseType,
)


# Param keys that steer the call and never end up in the body
ROUTING_FIELDS = frozenset({
    "headers",
    "options",
    "method",
    "path",
    "retry_count",
    "body",
    "credentials",
    "on_request",
    "on_response",
})

_SCHEME_RE = re.compile(r"https?://", re.IGNORECASE)


@dataclass
class CallParams:
    """A single high-level call before it is turned into a wire request"""
    method: HttpMethod
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None
    has_body: bool = False
    fields: Dict[str, Any] = field(default_factory=dict)
    credentials: Optional[Credentials] = None
    mode: Optional[RequestMode] = None
    response_type: Optional[ResponseType] = None
    on_request: Optional[Callable] = None
    on_response: Optional[Callable] = None
    retry_count: int = 0
    # Set on replays: headers and body are already in their wire form
    replay: bool = False


@dataclass
class RequestDescriptor:
    """Fully resolved request for one transport call"""
    url: str
    options: RequestOptions
    response_type: ResponseType
    request_name: str
    retry_count: int = 0


def to_method(value: Union[str, HttpMethod]) -> HttpMethod:
    """Coerce a method name into HttpMethod"""
    try:
        return HttpMethod(str(getattr(value, "value", value)).lower())
    except ValueError:
        raise ValidationError(f"Unsupported HTTP method: {value}", field="method") from None


def _to_enum(enum_cls: Any, value: Any, field_name: str) -> Any:
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Unsupported {field_name}: {value}", field=field_name
        ) from None


def to_response_type(value: Union[str, ResponseType]) -> ResponseType:
    """Coerce a response type name into ResponseType"""
    return _to_enum(ResponseType, value, "response_type")


def parse_call_params(
    method: Union[str, HttpMethod],
    path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> CallParams:
    """
    Split a params mapping into routing fields and body fields

    Args:
        method: HTTP method
        path: Absolute URL or path relative to the base path
        params: headers, body, credentials, options, on_request,
            on_response; every other key is a body field

    Returns:
        CallParams for the call
    """
    params = dict(params or {})
    options = params.get("options") or {}

    return CallParams(
        method=to_method(method),
        path=path,
        headers=dict(params.get("headers") or {}),
        body=params.get("body"),
        has_body=params.get("body") is not None,
        fields={k: v for k, v in params.items() if k not in ROUTING_FIELDS},
        credentials=_to_enum(Credentials, params.get("credentials"), "credentials"),
        mode=_to_enum(RequestMode, options.get("mode"), "mode"),
        response_type=_to_enum(ResponseType, options.get("response_type"), "response_type"),
        on_request=params.get("on_request"),
        on_response=params.get("on_response"),
        retry_count=int(params.get("retry_count") or 0),
    )


def build_full_path(base_path: str, path: str) -> str:
    """
    Build the full request URL

    A path starting with ``http`` is used verbatim, anything else is
    appended to the base path.
    """
    if path.startswith("http"):
        return path
    if path.startswith("/"):
        return base_path + path
    return base_path + "/" + path


def merge_headers(*header_maps: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Shallow merge, later maps win; header case is kept as given"""
    merged: Dict[str, str] = {}
    for headers in header_maps:
        if headers:
            merged.update(headers)
    return merged


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup; the last matching entry wins"""
    lower = name.lower()
    found = None
    for key, value in headers.items():
        if key.lower() == lower:
            found = value
    return found


def drop_header(headers: Mapping[str, str], name: str) -> Dict[str, str]:
    """Copy of headers without any casing of name"""
    lower = name.lower()
    return {k: v for k, v in headers.items() if k.lower() != lower}


def infer_request_type(content_type: Optional[str]) -> ResponseType:
    """Body encoding derived from the Content-Type header"""
    content_type = (content_type or "").lower()
    if "text" in content_type:
        return ResponseType.TEXT
    if "form" in content_type:
        return ResponseType.FORM_DATA
    if "json" in content_type:
        return ResponseType.JSON
    return ResponseType.ARRAY_BUFFER


def select_response_type(
    explicit: Optional[ResponseType],
    default: ResponseType = ResponseType.JSON,
) -> ResponseType:
    """Per-call response type wins over the default"""
    return explicit if explicit is not None else default


def build_body(
    call: CallParams,
    request_type: ResponseType,
    headers: Dict[str, str],
) -> Tuple[Any, Dict[str, str]]:
    """
    Resolve and encode the request body

    Returns:
        The encoded body and the headers to send with it. Content-Type is
        dropped for multipart bodies so the transport can set the boundary.
        Bytes bodies are sent as given.

    Raises:
        TypeError: JSON request type with a body json.dumps cannot encode
    """
    body = call.body if call.has_body else dict(call.fields)

    if isinstance(body, FormData):
        return body, drop_header(headers, "Content-Type")

    if call.replay or isinstance(body, (bytes, bytearray)):
        return body, headers

    if request_type == ResponseType.JSON:
        return json.dumps(body), headers

    return body, headers


def build_request_name(method: HttpMethod, url: str) -> str:
    """``method:url`` with the scheme stripped, used to label requests in logs"""
    return _SCHEME_RE.sub("", f"{method.value}:{url}")


def build_request(
    call: CallParams,
    base_path: str = "",
    default_headers: Optional[Mapping[str, str]] = None,
    credentials: Optional[Credentials] = None,
    mode: Optional[RequestMode] = None,
    default_response_type: ResponseType = ResponseType.JSON,
) -> RequestDescriptor:
    """
    Build the wire request for a call

    Args:
        call: Parsed call parameters
        base_path: Client base path
        default_headers: Client default headers, auth header included
        credentials: Client default credentials policy
        mode: Client default request mode
        default_response_type: Response type used when the call sets none

    Returns:
        RequestDescriptor ready for the transport
    """
    url = build_full_path(base_path, call.path)
    if call.replay:
        headers = dict(call.headers)
    else:
        headers = merge_headers(default_headers, call.headers)

    request_type = infer_request_type(get_header(headers, "Content-Type"))
    response_type = select_response_type(call.response_type, default_response_type)

    options = RequestOptions(
        method=call.method,
        headers=headers,
        credentials=call.credentials if call.credentials is not None else credentials,
        mode=call.mode if call.mode is not None else mode,
    )

    if call.method in BODY_METHODS:
        options.body, options.headers = build_body(call, request_type, headers)

    return RequestDescriptor(
        url=url,
        options=options,
        response_type=response_type,
        request_name=build_request_name(call.method, url),
        retry_count=call.retry_count,
    )
