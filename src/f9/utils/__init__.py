"""Utilities module initialization"""

from f9.utils.redact import SENSITIVE_FIELDS, redact_sensitive_data

__all__ = ["SENSITIVE_FIELDS", "redact_sensitive_data"]
