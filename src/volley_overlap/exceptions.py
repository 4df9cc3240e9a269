"""
Custom exception hierarchy for volley-overlap.

Only API misuse is raised. Problems with the lineup itself (wrong player
count, duplicate slots, bad coordinates) are reported as violations by the
validator and never surface here.

All exceptions include:
- Context information (slot values, config file, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from volley_overlap.exceptions import InvalidSlotError, ValidationError

    # Raise with context and suggestions
    raise InvalidSlotError(
        "Rotation slot out of range",
        context={"slot": 7, "valid": "1-6"},
        suggestions=["Use one of the six rotation slots 1-6"]
    )

    # Validation with multiple errors
    errors = ["Slot 3 is missing", "Slot 1 is assigned twice"]
    raise ValidationError(errors, context={"rotation_map": "home"})
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class VolleyOverlapError(Exception):
    """
    Base exception for all volley-overlap errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (slot, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class InvalidSlotError(VolleyOverlapError):
    """
    A rotation slot outside 1-6 was passed where a valid slot is required.

    Example::

        raise InvalidSlotError(
            "Unknown rotation slot",
            slot=0,
            suggestions=["Rotation slots are numbered 1-6"]
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        slot: Any = None,
    ):
        ctx = context or {}
        if slot is not None and "slot" not in ctx:
            ctx["slot"] = repr(slot)
        super().__init__(message, ctx, suggestions)


class ValidationError(VolleyOverlapError):
    """
    Data validation failed with one or more errors.

    Collects all validation errors instead of failing on the first one,
    providing a complete list of issues to fix.

    Example::

        errors = [
            "Slot 4 is assigned to both 'p4' and 'p7'",
            "Slot 5 has no player",
        ]
        raise ValidationError(errors, context={"source": "rotation map"})

    Attributes:
        errors: List of individual validation error messages
    """

    def __init__(
        self,
        errors: List[str],
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.errors = errors
        message = f"Validation failed with {len(errors)} error(s):\n"
        message += "\n".join(f"  {i + 1}. {e}" for i, e in enumerate(errors))
        super().__init__(message, context, suggestions)


class ConfigurationError(VolleyOverlapError):
    """
    Configuration or settings error.

    Raised when configuration is invalid, missing, or incompatible.

    Example::

        raise ConfigurationError(
            "Screen size must be positive",
            context={"width": 0, "height": 360},
            suggestions=["Set [screen] width and height to the reference canvas size"]
        )
    """

    pass


__all__ = [
    "VolleyOverlapError",
    "InvalidSlotError",
    "ValidationError",
    "ConfigurationError",
]
