"""Threshold configuration data structure."""
from dataclasses import dataclass
from typing import Optional

from ..core.errors import ConfigError


@dataclass
class ThresholdConfig:
    """Thresholds used by the component health rules."""
    cpu_temp_critical: float = 85.0
    cpu_temp_warning: float = 75.0
    cpu_load_warning: float = 90.0
    cpu_load_temp_warning: float = 70.0
    memory_used_warning: float = 90.0
    disk_free_critical_gb: float = 10.0
    disk_free_warning_gb: float = 20.0
    battery_capacity_ratio_warning: float = 0.5
    network_error_rate_warning: Optional[float] = None

    def __post_init__(self):
        """Fix invalid values and reject inconsistent pairs."""
        if self.cpu_temp_critical <= 0:
            self.cpu_temp_critical = 85.0
        if self.cpu_temp_warning <= 0:
            self.cpu_temp_warning = 75.0
        if self.cpu_load_warning <= 0 or self.cpu_load_warning > 100:
            self.cpu_load_warning = 90.0
        if self.cpu_load_temp_warning <= 0:
            self.cpu_load_temp_warning = 70.0
        if self.memory_used_warning <= 0 or self.memory_used_warning > 100:
            self.memory_used_warning = 90.0
        if self.disk_free_critical_gb < 0:
            self.disk_free_critical_gb = 10.0
        if self.disk_free_warning_gb < 0:
            self.disk_free_warning_gb = 20.0
        if not 0 < self.battery_capacity_ratio_warning <= 1:
            self.battery_capacity_ratio_warning = 0.5
        if self.network_error_rate_warning is not None and self.network_error_rate_warning <= 0:
            self.network_error_rate_warning = None

        if self.cpu_temp_warning > self.cpu_temp_critical:
            raise ConfigError(
                f"cpu_temp_warning ({self.cpu_temp_warning}) is above "
                f"cpu_temp_critical ({self.cpu_temp_critical})")
        if self.disk_free_critical_gb > self.disk_free_warning_gb:
            raise ConfigError(
                f"disk_free_critical_gb ({self.disk_free_critical_gb}) is above "
                f"disk_free_warning_gb ({self.disk_free_warning_gb})")
