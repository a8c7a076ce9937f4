"""
Custom exception hierarchy for the Monopoly simulator.

Rule outcomes such as "not enough cash to build" are returned as booleans by
the services. Exceptions are reserved for misuse of the engine and for bad
configuration handed to the strategy registry.
"""


class MonopolyError(Exception):
    """Base exception for all simulator errors."""


class ValidationError(MonopolyError):
    """Input validation failed (bad position, malformed board, empty deck)."""


class InvalidActionError(MonopolyError):
    """Action is not legal in the current state."""


class ConfigError(MonopolyError):
    """Strategy id or strategy parameters could not be resolved."""
