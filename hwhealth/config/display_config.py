"""Display configuration data structure."""
from dataclasses import dataclass


@dataclass
class DisplayConfig:
    """Report rendering preferences."""
    show_colors: bool = True
    show_healthy: bool = True
    time_format: str = "%Y-%m-%d %H:%M:%S"
    title: str = "Hardware Health Report"
