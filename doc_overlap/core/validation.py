"""
Input validation and error handling framework for the document overlap analyzer.

This module provides the exception hierarchy raised by the core, validation
utilities for documents and parameters, and decorators that apply them.
"""

import inspect
import logging
import re
from functools import wraps
from typing import Any, Callable, Dict, Iterable, Mapping, Optional


# Custom Exception Classes
class ValidationError(Exception):
    """Base class for validation errors."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class InvalidArgumentError(ValidationError):
    """Exception raised for malformed input such as non-string or null text."""
    pass


class DocumentValidationError(InvalidArgumentError):
    """Exception raised for invalid document ids or document text."""
    pass


class ParameterValidationError(ValidationError):
    """Exception raised for parameter validation errors."""
    pass


class DocumentNotFoundError(KeyError):
    """Raised when a document id is not present in a store."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(doc_id)

    def __str__(self):
        return f"Document not found: {self.doc_id!r}"


class AnalysisCancelledError(Exception):
    """Raised when an analysis run is cancelled through its token."""
    pass


class AnalysisTimeoutError(Exception):
    """Raised when an analysis run exceeds its configured time budget."""

    def __init__(self, timeout_seconds: float, completed_pairs: int, total_pairs: int):
        self.timeout_seconds = timeout_seconds
        self.completed_pairs = completed_pairs
        self.total_pairs = total_pairs
        super().__init__(
            f"Analysis exceeded {timeout_seconds}s after {completed_pairs}/{total_pairs} pairs"
        )


# Validation Utilities
class DocumentValidator:
    """Validation utilities for document ids, texts and document mappings."""

    @staticmethod
    def validate_text(text: Any, field: str = "text") -> str:
        """
        Validate raw document text.

        Empty strings are valid; they simply tokenize to nothing.

        Raises:
            InvalidArgumentError: If text is None or not a string
        """
        if text is None:
            raise InvalidArgumentError(f"{field} must not be None", field=field, value=text)
        if not isinstance(text, str):
            raise InvalidArgumentError(
                f"{field} must be a string, got {type(text).__name__}",
                field=field,
                value=text
            )
        return text

    @staticmethod
    def validate_document_id(doc_id: Any) -> str:
        """
        Validate a document identifier.

        Raises:
            DocumentValidationError: If the id is not a non-empty string
        """
        if not isinstance(doc_id, str):
            raise DocumentValidationError(
                f"Document id must be a string, got {type(doc_id).__name__}",
                field="doc_id",
                value=doc_id
            )
        if not doc_id.strip():
            raise DocumentValidationError("Document id cannot be empty", field="doc_id", value=doc_id)
        return doc_id

    @staticmethod
    def validate_documents(documents: Any) -> Dict[str, str]:
        """
        Validate a mapping of document id to text.

        Returns:
            A new dict preserving the mapping's iteration order

        Raises:
            InvalidArgumentError: If documents is not a mapping
            DocumentValidationError: If any id or text is invalid
        """
        if not isinstance(documents, Mapping):
            raise InvalidArgumentError(
                f"documents must be a mapping of id to text, got {type(documents).__name__}",
                field="documents",
                value=documents
            )

        validated = {}
        for doc_id, text in documents.items():
            DocumentValidator.validate_document_id(doc_id)
            try:
                DocumentValidator.validate_text(text, field=f"documents[{doc_id!r}]")
            except InvalidArgumentError as e:
                raise DocumentValidationError(e.message, field=e.field, value=e.value)
            validated[doc_id] = text
        return validated


class ParameterValidator:
    """Parameter validation utilities."""

    @staticmethod
    def validate_positive_integer(value: Any, field: str, min_value: int = 1, max_value: Optional[int] = None) -> int:
        """Validate positive integer parameter."""
        if isinstance(value, bool):
            raise ParameterValidationError(f"{field} must be an integer, got bool", field=field, value=value)

        if not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be an integer, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return value

    @staticmethod
    def validate_positive_float(value: Any, field: str, min_value: float = 0.0, max_value: Optional[float] = None) -> float:
        """Validate positive float parameter."""
        if isinstance(value, bool):
            raise ParameterValidationError(f"{field} must be a number, got bool", field=field, value=value)

        if not isinstance(value, (int, float)):
            try:
                value = float(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be a number, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return float(value)

    @staticmethod
    def validate_string(value: Any, field: str, min_length: int = 0, max_length: Optional[int] = None,
                        pattern: Optional[str] = None) -> str:
        """Validate string parameter."""
        if not isinstance(value, str):
            raise ParameterValidationError(
                f"{field} must be a string, got {type(value).__name__}",
                field=field,
                value=value
            )

        if len(value) < min_length:
            raise ParameterValidationError(
                f"{field} must be at least {min_length} characters, got {len(value)}",
                field=field,
                value=value
            )

        if max_length is not None and len(value) > max_length:
            raise ParameterValidationError(
                f"{field} must be at most {max_length} characters, got {len(value)}",
                field=field,
                value=value
            )

        if pattern and not re.match(pattern, value):
            raise ParameterValidationError(
                f"{field} does not match required pattern",
                field=field,
                value=value
            )

        return value

    @staticmethod
    def validate_choice(value: Any, field: str, choices: Iterable[str]) -> str:
        """Validate that a string parameter is one of the allowed choices."""
        choices = tuple(choices)
        if value not in choices:
            raise ParameterValidationError(
                f"{field} must be one of {', '.join(choices)}, got {value!r}",
                field=field,
                value=value
            )
        return value


# Decorators for validation
def validate_inputs(**validators: Callable[[Any], Any]):
    """
    Decorator to validate function inputs.

    Each validator receives the bound argument value and returns the value to
    pass on, raising a ValidationError when the value is unacceptable.

    Args:
        **validators: Dict mapping parameter names to validation functions
    """
    def decorator(func):
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    try:
                        bound_args.arguments[param_name] = validator(value)
                    except ValidationError:
                        raise
                    except Exception as e:
                        raise ParameterValidationError(
                            f"Validation failed for {param_name}: {str(e)}",
                            field=param_name,
                            value=value
                        )

            return func(*bound_args.args, **bound_args.kwargs)
        return wrapper
    return decorator


def handle_exceptions(default_return=None, reraise_types=None):
    """
    Decorator to log unexpected exceptions.

    Exceptions of ``reraise_types`` pass through untouched. Anything else is
    logged with its traceback, then re-raised unless a non-None
    ``default_return`` was given.

    Args:
        default_return: Default value to return on exception
        reraise_types: List of exception types to re-raise
    """
    if reraise_types is None:
        reraise_types = [ValidationError, DocumentNotFoundError, AnalysisCancelledError, AnalysisTimeoutError]

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except tuple(reraise_types):
                raise
            except Exception as e:
                logger = logging.getLogger(func.__module__)
                logger.error(f"Unhandled exception in {func.__name__}: {str(e)}", exc_info=True)

                if default_return is not None:
                    return default_return
                raise
        return wrapper
    return decorator
