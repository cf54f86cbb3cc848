"""Error handling utilities for the claim lifecycle predictor."""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


class ErrorType(Enum):
    """Enumeration of error types in the prediction system."""

    # Bedrock API Errors
    BEDROCK_RATE_LIMIT = "BEDROCK_RATE_LIMIT"
    BEDROCK_TIMEOUT = "BEDROCK_TIMEOUT"
    BEDROCK_AUTH_ERROR = "BEDROCK_AUTH_ERROR"
    BEDROCK_MODEL_ERROR = "BEDROCK_MODEL_ERROR"
    BEDROCK_INVALID_REQUEST = "BEDROCK_INVALID_REQUEST"
    BEDROCK_SERVICE_ERROR = "BEDROCK_SERVICE_ERROR"

    # Generation Errors
    GENERATION_EMPTY_RESPONSE = "GENERATION_EMPTY_RESPONSE"
    GENERATION_FAILED = "GENERATION_FAILED"

    # Prediction Errors
    INVALID_PREDICTION_INPUT = "INVALID_PREDICTION_INPUT"
    PREDICTION_INVARIANT_VIOLATED = "PREDICTION_INVARIANT_VIOLATED"

    # Configuration Errors
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"


@dataclass
class ErrorContext:
    """
    Context information for errors in the prediction system.

    Attributes:
        error_type: Type of error from ErrorType enum
        message: Human-readable error message
        recoverable: Whether the error can be recovered from
        fallback_action: Optional description of fallback action taken
        details: Optional additional error details
        original_exception: Optional original exception that caused this error
    """

    error_type: ErrorType
    message: str
    recoverable: bool
    fallback_action: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    original_exception: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error context to dictionary for logging/serialization.

        Returns:
            Dictionary representation of error context
        """
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
            "fallback_action": self.fallback_action,
            "details": self.details or {},
            "original_exception": str(self.original_exception) if self.original_exception else None
        }


class ClaimsPredictionError(Exception):
    """
    Base exception for all claim prediction errors.

    Wraps errors with an ErrorContext so callers can decide between
    degrading gracefully and surfacing the failure.

    Attributes:
        context: ErrorContext with detailed error information
    """

    def __init__(self, context: ErrorContext):
        self.context = context
        super().__init__(context.message)

    def __str__(self) -> str:
        base = f"{self.context.error_type.value}: {self.context.message}"
        if self.context.fallback_action:
            base += f" (Fallback: {self.context.fallback_action})"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return self.context.to_dict()


class BedrockAPIError(ClaimsPredictionError):
    """Exception for AWS Bedrock API errors."""

    @classmethod
    def from_client_error(
        cls,
        error: Exception,
        operation: str,
        recoverable: bool = False,
        fallback_action: Optional[str] = None
    ) -> "BedrockAPIError":
        """
        Create BedrockAPIError from boto3 ClientError.

        Args:
            error: Original boto3 ClientError
            operation: Description of operation that failed
            recoverable: Whether error is recoverable
            fallback_action: Optional fallback action description

        Returns:
            BedrockAPIError instance
        """
        error_code = "Unknown"
        error_message = str(error)

        if hasattr(error, 'response'):
            error_info = error.response.get("Error", {})
            error_code = error_info.get("Code", "Unknown")
            error_message = error_info.get("Message", str(error))

        error_type_map = {
            "ThrottlingException": ErrorType.BEDROCK_RATE_LIMIT,
            "TooManyRequestsException": ErrorType.BEDROCK_RATE_LIMIT,
            "RequestTimeout": ErrorType.BEDROCK_TIMEOUT,
            "RequestTimeoutException": ErrorType.BEDROCK_TIMEOUT,
            "UnauthorizedException": ErrorType.BEDROCK_AUTH_ERROR,
            "AccessDeniedException": ErrorType.BEDROCK_AUTH_ERROR,
            "ValidationException": ErrorType.BEDROCK_INVALID_REQUEST,
            "ModelNotReadyException": ErrorType.BEDROCK_MODEL_ERROR,
            "ModelTimeoutException": ErrorType.BEDROCK_TIMEOUT,
            "ServiceUnavailableException": ErrorType.BEDROCK_SERVICE_ERROR,
            "InternalServerException": ErrorType.BEDROCK_SERVICE_ERROR,
        }

        error_type = error_type_map.get(error_code, ErrorType.BEDROCK_SERVICE_ERROR)

        context = ErrorContext(
            error_type=error_type,
            message=f"Bedrock API error during {operation}: {error_message}",
            recoverable=recoverable,
            fallback_action=fallback_action,
            details={
                "error_code": error_code,
                "operation": operation
            },
            original_exception=error
        )

        return cls(context)


class GenerationTimeoutError(ClaimsPredictionError):
    """Exception raised when a text-generation call exceeds its time budget."""

    @classmethod
    def exceeded(cls, operation: str, timeout: float) -> "GenerationTimeoutError":
        context = ErrorContext(
            error_type=ErrorType.BEDROCK_TIMEOUT,
            message=f"Text generation for {operation} exceeded {timeout:g}s",
            recoverable=True,
            details={"operation": operation, "timeout": timeout}
        )
        return cls(context)


class InvalidPredictionInputError(ClaimsPredictionError):
    """Exception for malformed prediction input payloads."""

    @classmethod
    def invalid_field(
        cls,
        field_name: str,
        value: Any,
        reason: str
    ) -> "InvalidPredictionInputError":
        """
        Create error for a field that failed validation.

        Args:
            field_name: Wire name of the offending field
            value: Value that was rejected
            reason: Why the value was rejected

        Returns:
            InvalidPredictionInputError instance
        """
        context = ErrorContext(
            error_type=ErrorType.INVALID_PREDICTION_INPUT,
            message=f"Invalid value for '{field_name}': {reason}",
            recoverable=False,
            details={"field": field_name, "value": repr(value)}
        )
        return cls(context)


class PredictionInvariantError(ClaimsPredictionError):
    """Exception for a probability distribution that broke its invariants."""

    @classmethod
    def distribution_invalid(
        cls,
        full: int,
        partial: int,
        deny: int
    ) -> "PredictionInvariantError":
        context = ErrorContext(
            error_type=ErrorType.PREDICTION_INVARIANT_VIOLATED,
            message=(
                f"Probability distribution {full}/{partial}/{deny} "
                f"must be within [0, 100] and sum to 100"
            ),
            recoverable=False,
            details={"full": full, "partial": partial, "deny": deny}
        )
        return cls(context)


class ConfigurationError(ClaimsPredictionError):
    """Exception for missing or malformed configuration."""

    @classmethod
    def missing(cls, config_path: str) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_MISSING,
            message=f"Configuration file not found at '{config_path}'",
            recoverable=False,
            details={"config_path": config_path}
        )
        return cls(context)

    @classmethod
    def invalid(cls, config_path: str, error: Exception) -> "ConfigurationError":
        context = ErrorContext(
            error_type=ErrorType.CONFIG_INVALID,
            message=f"Configuration file '{config_path}' is invalid: {str(error)}",
            recoverable=False,
            details={"config_path": config_path},
            original_exception=error
        )
        return cls(context)


def handle_generation_error(
    error: Exception,
    operation: str,
    logger,
    fallback_action: Optional[str] = None
) -> ErrorContext:
    """
    Log a failed text-generation call and describe the fallback taken.

    Generation failures are always recoverable: the caller substitutes a
    deterministic value. Unlike document or API errors elsewhere, nothing is
    re-raised here.

    Args:
        error: Exception raised by the generation call
        operation: Description of operation that failed
        logger: Logger instance for error logging
        fallback_action: Optional fallback action description

    Returns:
        ErrorContext describing the failure
    """
    if isinstance(error, ClaimsPredictionError):
        context = error.context
        context.recoverable = True
        context.fallback_action = fallback_action or context.fallback_action
    else:
        context = ErrorContext(
            error_type=ErrorType.GENERATION_FAILED,
            message=f"Text generation failed during {operation}: {str(error)}",
            recoverable=True,
            fallback_action=fallback_action,
            details={"operation": operation},
            original_exception=error
        )

    logger.warning(
        f"Recoverable generation error in {operation}: "
        f"{context.error_type.value}: {context.message} (Fallback: {context.fallback_action})"
    )
    return context
