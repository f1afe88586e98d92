"""
Configuration Validator
Validates client configuration with clear error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type
from enum import Enum

from f9.models.types import Credentials, RequestMode, ResponseType


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Validates a raw configuration dictionary before it becomes a ClientConfig
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_formats(config)
        self._validate_ranges(config)
        self._validate_enums(config)
        self._validate_auth(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from f9.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
            )

    def _validate_formats(self, config: Dict[str, Any]) -> None:
        """Validate field formats"""
        base_path = config.get("base_path")
        if base_path is not None and not isinstance(base_path, str):
            self._errors.append(ValidationErrorDetail(
                field="base_path",
                message="base_path must be a string",
                value=base_path
            ))

        headers = config.get("default_headers")
        if headers is not None:
            if not isinstance(headers, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
            ):
                self._errors.append(ValidationErrorDetail(
                    field="default_headers",
                    message="default_headers must map header names to string values",
                ))

    def _validate_ranges(self, config: Dict[str, Any]) -> None:
        """Validate numeric ranges"""
        timeout = config.get("timeout")
        if timeout is not None:
            if not isinstance(timeout, (int, float)) or timeout <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout must be a positive number (milliseconds)",
                    value=timeout
                ))
            elif timeout < 1000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should be at least 1000ms for reliable operation",
                    value=timeout
                ))
            elif timeout > 300000:
                self._errors.append(ValidationErrorDetail(
                    field="timeout",
                    message="timeout should not exceed 300000ms (5 minutes)",
                    value=timeout
                ))

        for pool_field in ("pool_connections", "pool_maxsize"):
            value = config.get(pool_field)
            if value is not None and (not isinstance(value, int) or value < 1):
                self._errors.append(ValidationErrorDetail(
                    field=pool_field,
                    message=f"{pool_field} must be a positive integer",
                    value=value
                ))

    def _validate_enums(self, config: Dict[str, Any]) -> None:
        """Validate enumerated settings"""
        enum_fields: Dict[str, Type[Enum]] = {
            "credentials": Credentials,
            "mode": RequestMode,
            "response_type": ResponseType,
        }
        for field_name, enum_cls in enum_fields.items():
            value = config.get(field_name)
            if value is None:
                continue
            valid_values = [e.value for e in enum_cls]
            raw = value.value if isinstance(value, enum_cls) else value
            if raw not in valid_values:
                self._errors.append(ValidationErrorDetail(
                    field=field_name,
                    message=f"{field_name} must be one of: {', '.join(valid_values)}",
                    value=value
                ))

    def _validate_auth(self, config: Dict[str, Any]) -> None:
        """Validate authentication descriptor"""
        auth = config.get("auth")
        if auth is None or not isinstance(auth, dict):
            return

        auth_type = auth.get("type")
        if auth_type not in ("Bearer", "Basic"):
            self._errors.append(ValidationErrorDetail(
                field="auth.type",
                message="auth.type must be one of: Bearer, Basic",
                value=auth_type
            ))
            return

        if auth_type == "Basic" and "token" in auth:
            self._errors.append(ValidationErrorDetail(
                field="auth.token",
                message="Basic auth takes login and password, not token",
                value="[REDACTED]"
            ))
