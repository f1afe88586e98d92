"""Redaction of sensitive values before logging"""

from typing import Any


# Sensitive fields that should be redacted in logs
SENSITIVE_FIELDS = [
    "authorization",
    "x-api-key",
    "password",
    "token",
    "cookie",
]


def redact_sensitive_data(obj: Any) -> Any:
    """Redact sensitive data from object for logging"""
    if obj is None:
        return obj

    if isinstance(obj, str):
        return obj

    if isinstance(obj, list):
        return [redact_sensitive_data(item) for item in obj]

    if isinstance(obj, dict):
        redacted = {}
        for key, value in obj.items():
            lower_key = str(key).lower()
            is_sensitive = any(
                field in lower_key for field in SENSITIVE_FIELDS
            )

            if is_sensitive:
                redacted[key] = "[REDACTED]"
            elif isinstance(value, (dict, list)):
                redacted[key] = redact_sensitive_data(value)
            else:
                redacted[key] = value
        return redacted

    return obj
