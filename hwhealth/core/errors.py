"""Exception types raised by providers, evaluators and configuration."""


class HealthCheckError(Exception):
    """Base class for hwhealth errors."""


class EvaluationFault(HealthCheckError):
    """A snapshot could not be evaluated, e.g. it is malformed."""


class AcquisitionFault(HealthCheckError):
    """The metrics provider could not produce a snapshot."""

    def __init__(self, component: str, reason: str):
        super().__init__(f"{component}: {reason}")
        self.component = component
        self.reason = reason


class ConfigError(HealthCheckError):
    """Configuration file is missing, unreadable or inconsistent."""
