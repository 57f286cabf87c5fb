"""System metrics collector for CPU, memory, disk, battery and network."""
import logging
import platform
import socket
import time
from typing import List, Optional

import psutil

from ..config.collection_config import CollectionConfig
from ..core.errors import AcquisitionFault
from ..core.metric_field import from_optional
from ..core.snapshots import (BatterySnapshot, CpuSnapshot, DiskSnapshot,
                              MemorySnapshot, NetworkSnapshot, SystemSnapshot)
from .battery_collector import read_battery_details
from .network_collector import NetworkCollector

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1024 ** 3
TEMPERATURE_SENSORS = ("coretemp", "k10temp", "cpu_thermal", "acpitz")


class SystemCollector:
    """Metrics provider backed by psutil."""

    def __init__(self, config: Optional[CollectionConfig] = None):
        """Initialize the system collector."""
        self.config = config or CollectionConfig()
        self.network = NetworkCollector(self.config)

    def system(self) -> SystemSnapshot:
        """Collect host identity and uptime."""
        uname = platform.uname()
        return SystemSnapshot(
            hostname=from_optional(socket.gethostname() or None),
            os_name=from_optional(uname.system or None),
            os_version=from_optional(uname.release or None),
            architecture=from_optional(uname.machine or None),
            uptime_hours=from_optional(self._get_uptime_hours()),
        )

    def cpu(self) -> CpuSnapshot:
        """Collect processor temperature and load."""
        try:
            load = psutil.cpu_percent(interval=self.config.cpu_sample_interval)
            cores = psutil.cpu_count(logical=True)
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault("CPU", str(exc)) from exc

        return CpuSnapshot(
            name=from_optional(platform.processor() or None),
            temperature_c=from_optional(self._get_temperature()),
            load=from_optional(f"{load:.0f}%"),
            logical_cores=from_optional(cores),
        )

    def memory(self) -> MemorySnapshot:
        """Collect physical memory totals."""
        try:
            mem = psutil.virtual_memory()
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault("Memory", str(exc)) from exc
        return MemorySnapshot(
            total_bytes=from_optional(mem.total),
            available_bytes=from_optional(mem.available),
        )

    def disk_ids(self) -> List[str]:
        """List mountpoints of physical partitions in psutil order."""
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault("Disk", str(exc)) from exc

        mountpoints = []
        for part in partitions:
            if part.fstype.lower() in self.config.skip_filesystems:
                continue
            if part.mountpoint not in mountpoints:
                mountpoints.append(part.mountpoint)
        return mountpoints

    def disk(self, mountpoint: str) -> DiskSnapshot:
        """Collect capacity of the volume mounted at mountpoint."""
        try:
            usage = psutil.disk_usage(mountpoint)
            partitions = psutil.disk_partitions(all=False)
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault(f"Disk {mountpoint}", str(exc)) from exc

        device = mountpoint
        filesystem = None
        for part in partitions:
            if part.mountpoint == mountpoint:
                device = part.device or mountpoint
                filesystem = part.fstype or None
                break

        return DiskSnapshot(
            device=device,
            mountpoint=from_optional(mountpoint),
            filesystem=from_optional(filesystem),
            total_gb=from_optional(usage.total / BYTES_PER_GB),
            free_gb=from_optional(usage.free / BYTES_PER_GB),
        )

    def battery(self) -> Optional[BatterySnapshot]:
        """Collect battery state; None when the machine has no battery."""
        try:
            battery = psutil.sensors_battery()
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault("Battery", str(exc)) from exc
        except AttributeError:
            # sensors_battery is not implemented on every platform
            return None
        if battery is None:
            return None

        details = read_battery_details()
        status = details["status"]
        if status is None:
            status = "Charging" if battery.power_plugged else "Discharging"

        return BatterySnapshot(
            status=from_optional(status),
            charge_percent=from_optional(battery.percent),
            design_capacity=from_optional(details["design_capacity"]),
            full_charge_capacity=from_optional(details["full_charge_capacity"]),
        )

    def adapter_ids(self) -> List[str]:
        return self.network.adapter_ids()

    def adapter(self, name: str) -> NetworkSnapshot:
        return self.network.adapter(name)

    def _get_temperature(self) -> Optional[float]:
        """Get processor temperature from the first known sensor."""
        try:
            temps = psutil.sensors_temperatures()
        except (AttributeError, OSError, RuntimeError):
            return None
        for sensor in TEMPERATURE_SENSORS:
            if temps.get(sensor):
                return temps[sensor][0].current
        return None

    def _get_uptime_hours(self) -> Optional[float]:
        """Get hours since boot."""
        try:
            boot_time = psutil.boot_time()
        except (OSError, RuntimeError):
            return None
        return (time.time() - boot_time) / 3600
