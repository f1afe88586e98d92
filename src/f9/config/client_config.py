"""
f9 Client Configuration Types and Schema
Type-safe configuration objects for the f9 client
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from f9.models.auth import Auth
from f9.models.types import Credentials, RequestMode, ResponseType


class ConfigDefaults:
    """Default configuration values"""
    BASE_PATH = ""
    RESPONSE_TYPE = ResponseType.JSON
    TIMEOUT = 30000
    POOL_CONNECTIONS = 10
    POOL_MAXSIZE = 10
    ENABLE_AUDIT_LOG = False

    @staticmethod
    def headers() -> Dict[str, str]:
        return {"Content-Type": "application/json"}


# Environment variable mapping
ENV_VAR_MAPPING = {
    "F9_BASE_PATH": "base_path",
    "F9_CREDENTIALS": "credentials",
    "F9_MODE": "mode",
    "F9_RESPONSE_TYPE": "response_type",
    "F9_TIMEOUT": "timeout",
    "F9_POOL_CONNECTIONS": "pool_connections",
    "F9_POOL_MAXSIZE": "pool_maxsize",
    "F9_ENABLE_AUDIT_LOG": "enable_audit_log",
}

# Environment variables folded into the ``auth`` descriptor
AUTH_ENV_VAR_MAPPING = {
    "F9_AUTH_TYPE": "type",
    "F9_AUTH_TOKEN": "token",
    "F9_AUTH_KEY": "key",
    "F9_AUTH_HEADER": "header",
    "F9_AUTH_LOGIN": "login",
    "F9_AUTH_PASSWORD": "password",
}


class ClientConfig(BaseModel):
    """
    Main client configuration class
    Defines all configuration options for F9Client
    """

    base_path: str = Field(
        default=ConfigDefaults.BASE_PATH,
        description="Prefix for relative request paths"
    )
    auth: Optional[Auth] = Field(
        default=None,
        description="Bearer or Basic authentication descriptor"
    )
    credentials: Optional[Credentials] = Field(
        default=None,
        description="Default credentials policy"
    )
    mode: Optional[RequestMode] = Field(
        default=None,
        description="Default request mode"
    )
    response_type: ResponseType = Field(
        default=ConfigDefaults.RESPONSE_TYPE,
        description="Response reader used when a call does not choose one"
    )
    default_headers: Dict[str, str] = Field(
        default_factory=ConfigDefaults.headers,
        description="Headers sent with every call"
    )
    timeout: int = Field(
        default=ConfigDefaults.TIMEOUT,
        description="Transport timeout in milliseconds",
        ge=1000,
        le=300000
    )
    pool_connections: int = Field(
        default=ConfigDefaults.POOL_CONNECTIONS,
        description="Connection pools kept by the default transport",
        ge=1
    )
    pool_maxsize: int = Field(
        default=ConfigDefaults.POOL_MAXSIZE,
        description="Connections per pool kept by the default transport",
        ge=1
    )
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Hand an audit entry to the audit callback after each call"
    )

    model_config = {
        "str_strip_whitespace": True,
    }
