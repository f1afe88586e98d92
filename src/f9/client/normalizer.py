"""
Response normalizer
Turns a transport result or a transport error into a ResponseEnvelope
"""

import logging
import time
from typing import Any, Optional
from urllib.parse import parse_qsl

from f9.client.request_builder import RequestDescriptor
from f9.client.transport import Transport, TransportResponse, invoke, iter_headers
from f9.models.envelope import Metadata, ResponseEnvelope
from f9.models.types import ResponseType

logger = logging.getLogger(__name__)


def build_metadata(
    request: RequestDescriptor,
    start_time: Optional[float] = None,
    response: Optional[TransportResponse] = None,
    status: Optional[int] = None,
    message: Optional[str] = None,
) -> Metadata:
    """Metadata for a request; pre-call metadata when no start time is given"""
    processing_time = 0.0
    if start_time is not None:
        processing_time = (time.perf_counter() - start_time) * 1000

    headers = None
    if response is not None:
        headers = dict(iter_headers(response.headers))

    return Metadata(
        url=request.url,
        method=request.options.method,
        request_options=request.options,
        request_name=request.request_name,
        response_type=request.response_type,
        processing_time=processing_time,
        status=status,
        message=message,
        headers=headers,
        retry_count=request.retry_count,
    )


def read_body(response: TransportResponse, response_type: ResponseType) -> Any:
    """Decode a response body with the reader for response_type"""
    if response_type == ResponseType.JSON:
        return response.json()
    if response_type == ResponseType.TEXT:
        return response.text
    if response_type == ResponseType.FORM_DATA:
        return dict(parse_qsl(response.text, keep_blank_values=True, strict_parsing=True))
    return response.content


def _read_error_body(response: TransportResponse) -> Any:
    """Structured body if it parses, else the text, else None"""
    text = response.text
    try:
        return response.json()
    except ValueError:
        return text or None


def normalize_response(
    request: RequestDescriptor,
    response: TransportResponse,
    start_time: float,
) -> ResponseEnvelope[Any]:
    """Envelope for a response the transport did return"""
    status = response.status_code
    message = response.reason or ""

    if not response.ok:
        data = _read_error_body(response)
        success = False
    else:
        success = True
        try:
            data = read_body(response, request.response_type)
        except ValueError as e:
            logger.debug(
                f"Could not decode {request.request_name} as "
                f"{request.response_type.value}: {e}"
            )
            data = None

    return ResponseEnvelope(
        success=success,
        status=status,
        message=message,
        metadata=build_metadata(request, start_time, response, status, message),
        data=data,
    )


def normalize_error(
    request: RequestDescriptor,
    error: Exception,
    start_time: float,
) -> ResponseEnvelope[Any]:
    """Envelope for a transport that raised before any status was available"""
    message = str(error) or error.__class__.__name__
    return ResponseEnvelope(
        success=False,
        status=0,
        message=message,
        metadata=build_metadata(request, start_time, status=0, message=message),
        data=None,
    )


def execute(transport: Transport, request: RequestDescriptor) -> ResponseEnvelope[Any]:
    """
    Send a request and normalize whatever comes back

    Never raises for network or HTTP failures: both become envelopes.
    """
    start_time = time.perf_counter()
    try:
        response = invoke(transport, request)
    except Exception as e:
        logger.warning(f"Request {request.request_name} failed: {e}")
        return normalize_error(request, e, start_time)

    envelope = normalize_response(request, response, start_time)
    logger.debug(
        f"Completed {request.request_name} with {envelope.status} "
        f"in {envelope.metadata.processing_time:.1f}ms"
    )
    return envelope
