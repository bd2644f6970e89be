"""Structural errors raised by the Knowledge Load Balancer."""

from __future__ import annotations

from typing import List, Sequence


class KLBError(ValueError):
    """Base class for caller-recoverable scheduling input problems."""


class ConfigurationError(KLBError):
    """Raised when a scheduling configuration cannot be used."""


class DependencyCycleError(KLBError):
    """Raised when lesson prerequisites form a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: List[str] = list(cycle)
        super().__init__(f"Lesson prerequisites form a cycle: {' -> '.join(self.cycle)}")


__all__ = ["ConfigurationError", "DependencyCycleError", "KLBError"]
