"""
f9 HTTP client for Python

Every call returns a ResponseEnvelope, whether it succeeded, failed with an
HTTP status, or never reached the server
"""

from f9.client import (
    CredentialStore,
    EnvironmentCredentialStore,
    F9Client,
    HttpAuditEntry,
    RequestsTransport,
    Transport,
    WILDCARD,
)
from f9.exceptions import (
    ConfigError,
    F9Error,
    ValidationError,
)

# Configuration
from f9.config import (
    ClientConfig,
    ConfigDefaults,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
)

# Models
from f9.models import (
    BasicAuth,
    BearerAuth,
    Credentials,
    FormData,
    HttpMethod,
    Metadata,
    RequestMode,
    RequestOptions,
    ResponseEnvelope,
    ResponseType,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "F9Client",
    "HttpAuditEntry",
    "RequestsTransport",
    "Transport",
    "CredentialStore",
    "EnvironmentCredentialStore",
    "WILDCARD",
    # Exceptions
    "F9Error",
    "ValidationError",
    "ConfigError",
    # Configuration
    "ClientConfig",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    # Models
    "BasicAuth",
    "BearerAuth",
    "Credentials",
    "FormData",
    "HttpMethod",
    "Metadata",
    "RequestMode",
    "RequestOptions",
    "ResponseEnvelope",
    "ResponseType",
]
