"""
Custom exceptions for the purchase order data generator.

This module contains the exception classes raised for invalid generator
inputs, unknown date range presets and out-of-bounds query ranges.
"""

from typing import Any


class OrderDataGenException(Exception):
    """Base exception for all order data generator errors."""

    pass


class InvalidArgumentError(OrderDataGenException, ValueError):
    """Exception raised when a caller passes a value the generator cannot use."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        invalid_value: Any | None = None,
        validation_errors: list[str] | None = None,
    ):
        self.argument = argument
        self.invalid_value = invalid_value
        self.validation_errors = validation_errors or []

        # Build detailed error message
        error_parts = [message]

        if argument:
            error_parts.append(f"Argument: {argument}")

        if invalid_value is not None:
            error_parts.append(f"Value: {invalid_value!r}")

        if validation_errors:
            error_parts.extend(
                [f"Validation error: {error}" for error in validation_errors]
            )

        super().__init__(" | ".join(error_parts))


class InvalidDateRangeError(InvalidArgumentError):
    """Exception raised when a requested date range exceeds the allowed span."""

    def __init__(self, start_date: Any, end_date: Any, max_days: int):
        self.start_date = start_date
        self.end_date = end_date
        self.max_days = max_days

        message = (
            f"Date range {start_date} to {end_date} exceeds the maximum "
            f"of {max_days} days"
        )

        super().__init__(message, argument="end_date", invalid_value=end_date)


class UnknownPresetError(InvalidArgumentError):
    """Exception raised when a date range preset label is not recognised."""

    def __init__(self, preset: str, available_presets: list[str] | None = None):
        self.preset = preset
        self.available_presets = available_presets or []

        message = f"Unknown date range preset: {preset}"

        if available_presets:
            message = f"{message}. Available presets: {', '.join(available_presets)}"

        super().__init__(message, argument="preset")
