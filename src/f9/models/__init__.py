"""Models module initialization"""

from f9.models.auth import Auth, BasicAuth, BearerAuth
from f9.models.envelope import Metadata, RequestOptions, ResponseEnvelope
from f9.models.form_data import FormData
from f9.models.types import (
    BODY_METHODS,
    Credentials,
    HttpMethod,
    RequestMode,
    ResponseType,
)

__all__ = [
    "Auth",
    "BasicAuth",
    "BearerAuth",
    "Metadata",
    "RequestOptions",
    "ResponseEnvelope",
    "FormData",
    "BODY_METHODS",
    "Credentials",
    "HttpMethod",
    "RequestMode",
    "ResponseType",
]
