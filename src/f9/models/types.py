"""Enumerations shared by the request pipeline"""

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


# Methods that carry a request body
BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH, HttpMethod.DELETE)


class ResponseType(str, Enum):
    """Body reader used for a response (also used as the inferred request type)"""
    JSON = "json"
    TEXT = "text"
    BLOB = "blob"
    ARRAY_BUFFER = "arrayBuffer"
    FORM_DATA = "formData"


class Credentials(str, Enum):
    """Credentials policy forwarded to the transport"""
    OMIT = "omit"
    SAME_ORIGIN = "same-origin"
    INCLUDE = "include"


class RequestMode(str, Enum):
    """Request mode forwarded to the transport"""
    CORS = "cors"
    NO_CORS = "no-cors"
    SAME_ORIGIN = "same-origin"
    NAVIGATE = "navigate"
