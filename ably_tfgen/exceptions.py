"""
Custom Exception Hierarchy for the Ably Terraform generator

This module provides the exception hierarchy shared by the Control API
client, the Terraform emitter and the run orchestrator, so that fatal and
recoverable failures carry the same structured context.
"""

from typing import Any, Dict, Optional


class AblyTerraformGeneratorError(Exception):
    """
    Base exception class for all generator related errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


class ConfigurationError(AblyTerraformGeneratorError):
    """Raised when required configuration is missing or invalid."""

    def __init__(
        self, message: str, setting: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        kwargs["context"] = context
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        super().__init__(message, **kwargs)


# Control API exceptions
class ControlApiError(AblyTerraformGeneratorError):
    """Base class for Ably Control API errors.

    ``payload`` holds the decoded error body returned by the API, when there
    was one, so it can be shown to the user alongside the message.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if status_code is not None:
            context["status_code"] = status_code
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.payload = payload

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["payload"] = self.payload
        return result


class AuthenticationError(ControlApiError):
    """Raised when the account id cannot be resolved from the access token."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "ABLY_AUTH_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check that ABLY_ACCOUNT_TOKEN is a valid Control API access token",
        )
        super().__init__(message, **kwargs)


class ResourceFetchError(ControlApiError):
    """Raised when listing an account's or an app's resources fails."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        app_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if resource_type:
            context["resource_type"] = resource_type
        if app_id:
            context["app_id"] = app_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "ABLY_FETCH_FAILED")
        super().__init__(message, **kwargs)
        self.resource_type = resource_type
        self.app_id = app_id


class ResourceParseError(ResourceFetchError):
    """Raised when the API returns records that do not match the data model."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "ABLY_UNEXPECTED_PAYLOAD")
        super().__init__(message, **kwargs)


# Emission exceptions
class UnsupportedRuleTypeError(AblyTerraformGeneratorError):
    """Raised in strict mode when a rule's type has no registered handler."""

    def __init__(
        self,
        message: str,
        rule_type: Optional[str] = None,
        rule_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if rule_type:
            context["rule_type"] = rule_type
        if rule_id:
            context["rule_id"] = rule_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "UNSUPPORTED_RULE_TYPE")
        super().__init__(message, **kwargs)


class OutputWriteError(AblyTerraformGeneratorError):
    """Raised when a generated Terraform file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if path:
            context["path"] = path
        kwargs["context"] = context
        kwargs.setdefault("error_code", "OUTPUT_WRITE_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check that the output directory is writable",
        )
        super().__init__(message, **kwargs)
