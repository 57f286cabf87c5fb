"""Verdict and issue data models produced by health evaluation."""
from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    HEALTHY = "Healthy"
    WARNING = "Warning"
    CRITICAL = "Critical"
    UNKNOWN = "Unknown"  # evaluation failed; never compared against thresholds


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class Verdict:
    """Severity classification and explanation for one snapshot."""
    status: Status
    message: str
    priority: Priority = Priority.LOW

    @classmethod
    def healthy(cls, message: str) -> "Verdict":
        return cls(Status.HEALTHY, message, Priority.LOW)

    @classmethod
    def unknown(cls, reason: str) -> "Verdict":
        return cls(Status.UNKNOWN, reason, Priority.LOW)


@dataclass(frozen=True)
class Issue:
    """A labeled verdict entered into the critical or warning view."""
    component_label: str
    verdict: Verdict
