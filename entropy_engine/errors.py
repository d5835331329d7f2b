# entropy_engine/errors.py
"""
Entropy Engine - Custom Exceptions v1.0

Copyright (c) 2025 Brent Lefebure / EhkoLabs
Licensed under AGPLv3

Error types for catalog construction, configuration and serialisation.
Each exception carries a technical message (for logs) and a shorter
user-facing message.

None of these ever reach a caller of the three analysis entry points:
rule errors are absorbed when the catalog is built, serialisation errors
are absorbed by the facade.
"""


class EntropyEngineError(Exception):
    """Base exception for engine errors."""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


# =============================================================================
# CATALOG ERRORS
# =============================================================================

class RuleCompileError(EntropyEngineError):
    """A pattern rule could not be compiled."""

    def __init__(self, pattern: str, category: str, reason: str):
        super().__init__(
            f"Pattern for '{category}' failed to compile: {reason} ({pattern!r})",
            f"Rule '{category}' is malformed and was skipped."
        )
        self.pattern = pattern
        self.category = category
        self.reason = reason


# =============================================================================
# SERIALISATION ERRORS
# =============================================================================

class SerializationError(EntropyEngineError):
    """A result could not be encoded to JSON."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Serialisation failed for {operation}: {reason}",
            "The result could not be encoded; an empty result was returned."
        )
        self.operation = operation
        self.reason = reason


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigError(EntropyEngineError):
    """Engine configuration is invalid."""

    def __init__(self, field: str, issue: str):
        super().__init__(
            f"Config error: {field} - {issue}",
            f"Invalid setting '{field}': {issue}"
        )
        self.field = field
        self.issue = issue


# =============================================================================
# MODULE EXPORTS
# =============================================================================

__all__ = [
    "EntropyEngineError",
    "RuleCompileError",
    "SerializationError",
    "ConfigError",
]
