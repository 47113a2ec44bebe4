"""Error taxonomy for topology generation.

ConfigurationError is raised up front and never retried. GenerationFailure
is only raised once the bounded retry loop in the pipeline is exhausted.
InvariantViolation signals a logic defect and must never be swallowed.
"""

from __future__ import annotations

from typing import List, Optional


class TopologyError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(TopologyError, ValueError):
    pass


class GenerationFailure(TopologyError):
    def __init__(self, message: str, seed: Optional[int] = None, attempts: int = 0, reasons: Optional[List[str]] = None):
        super().__init__(message)
        self.seed = seed
        self.attempts = attempts
        self.reasons = list(reasons or [])


class InvariantViolation(TopologyError):
    pass


class SerializationError(TopologyError, ValueError):
    pass


__all__ = [
    "TopologyError",
    "ConfigurationError",
    "GenerationFailure",
    "InvariantViolation",
    "SerializationError",
]
