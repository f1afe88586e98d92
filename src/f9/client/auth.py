"""
Auth header injection for F9Client
"""

import base64
import logging
import os
from typing import Dict, Optional, Protocol

from f9.models.auth import BasicAuth, BearerAuth

logger = logging.getLogger(__name__)

DEFAULT_AUTH_HEADER = "Authorization"


class CredentialStore(Protocol):
    """Key-value lookup consulted for Bearer tokens given by ``key``"""

    def get(self, key: str) -> Optional[str]:
        ...


class EnvironmentCredentialStore:
    """Credential store reading tokens from environment variables"""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        return os.environ.get(f"{self._prefix}{key}")


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 4 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 4:
        return "*" * len(val)
    return val[:4] + "*" * (len(val) - 4)


def build_auth_header(
    auth: Optional[object],
    credential_store: Optional[CredentialStore] = None,
) -> Dict[str, str]:
    """
    Derive the auth header for an auth descriptor

    Args:
        auth: BearerAuth, BasicAuth or None
        credential_store: Lookup used when a Bearer descriptor only names a key

    Returns:
        A dict holding zero or one header entry
    """
    if auth is None:
        return {}

    header = getattr(auth, "header", None) or DEFAULT_AUTH_HEADER

    if isinstance(auth, BearerAuth):
        token = auth.token or ""
        if not token and auth.key and credential_store is not None:
            token = credential_store.get(auth.key) or ""
        if not token:
            logger.debug("Bearer auth has no resolvable token, no header set")
            return {}
        logger.debug(f"Bearer auth header {header}={_mask_value(token)}")
        return {header: f"Bearer {token}"}

    if isinstance(auth, BasicAuth):
        if not auth.login or not auth.password:
            logger.debug("Basic auth is missing login or password, no header set")
            return {}
        encoded = base64.b64encode(
            f"{auth.login}:{auth.password}".encode("utf-8")
        ).decode("ascii")
        return {header: f"Basic {encoded}"}

    logger.warning(f"Unknown auth descriptor {type(auth).__name__}, no header set")
    return {}
