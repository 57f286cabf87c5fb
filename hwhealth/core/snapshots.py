"""Snapshot data models for each scanned hardware component."""
from dataclasses import dataclass, fields
from enum import Enum

from .metric_field import UNAVAILABLE, MetricField, Present


class ComponentKind(Enum):
    """Component kinds, declared in scan order."""
    SYSTEM = "System"
    CPU = "CPU"
    MEMORY = "Memory"
    DISK = "Disk"
    BATTERY = "Battery"
    NETWORK = "Network"


class _Snapshot:
    """Shared behaviour for snapshot dataclasses."""

    KIND: ComponentKind

    def is_empty(self) -> bool:
        """True when no metric field holds a value."""
        return not any(
            isinstance(getattr(self, f.name), Present) for f in fields(self)
        )

    @property
    def label(self) -> str:
        return self.KIND.value


@dataclass(frozen=True)
class SystemSnapshot(_Snapshot):
    """Identity of the scanned machine."""
    KIND = ComponentKind.SYSTEM

    hostname: MetricField[str] = UNAVAILABLE
    os_name: MetricField[str] = UNAVAILABLE
    os_version: MetricField[str] = UNAVAILABLE
    architecture: MetricField[str] = UNAVAILABLE
    uptime_hours: MetricField[float] = UNAVAILABLE

    @classmethod
    def unavailable(cls) -> "SystemSnapshot":
        return cls()


@dataclass(frozen=True)
class CpuSnapshot(_Snapshot):
    """Processor readings; load is kept in its display form, e.g. '95%'."""
    KIND = ComponentKind.CPU

    name: MetricField[str] = UNAVAILABLE
    temperature_c: MetricField[float] = UNAVAILABLE
    load: MetricField[str] = UNAVAILABLE
    logical_cores: MetricField[int] = UNAVAILABLE

    @classmethod
    def unavailable(cls) -> "CpuSnapshot":
        return cls()


@dataclass(frozen=True)
class MemorySnapshot(_Snapshot):
    """Physical memory totals in bytes."""
    KIND = ComponentKind.MEMORY

    total_bytes: MetricField[int] = UNAVAILABLE
    available_bytes: MetricField[int] = UNAVAILABLE

    @classmethod
    def unavailable(cls) -> "MemorySnapshot":
        return cls()


@dataclass(frozen=True)
class DiskSnapshot(_Snapshot):
    """Capacity of one mounted volume, in GB."""
    KIND = ComponentKind.DISK

    device: str
    mountpoint: MetricField[str] = UNAVAILABLE
    filesystem: MetricField[str] = UNAVAILABLE
    total_gb: MetricField[float] = UNAVAILABLE
    free_gb: MetricField[float] = UNAVAILABLE

    def is_empty(self) -> bool:
        return not any(
            isinstance(getattr(self, f.name), Present)
            for f in fields(self) if f.name != "device"
        )

    @property
    def label(self) -> str:
        mountpoint = self.mountpoint
        if isinstance(mountpoint, Present):
            return f"Disk {mountpoint.value}"
        return f"Disk {self.device}"

    @classmethod
    def unavailable(cls, device: str) -> "DiskSnapshot":
        return cls(device=device)


@dataclass(frozen=True)
class BatterySnapshot(_Snapshot):
    """Battery state; capacities are in the provider's raw units."""
    KIND = ComponentKind.BATTERY

    status: MetricField[str] = UNAVAILABLE
    charge_percent: MetricField[float] = UNAVAILABLE
    design_capacity: MetricField[float] = UNAVAILABLE
    full_charge_capacity: MetricField[float] = UNAVAILABLE

    @classmethod
    def unavailable(cls) -> "BatterySnapshot":
        return cls()


@dataclass(frozen=True)
class NetworkSnapshot(_Snapshot):
    """Link state and counters of one network adapter."""
    KIND = ComponentKind.NETWORK

    name: str
    is_up: MetricField[bool] = UNAVAILABLE
    speed_mbps: MetricField[int] = UNAVAILABLE
    bytes_sent: MetricField[int] = UNAVAILABLE
    bytes_recv: MetricField[int] = UNAVAILABLE
    packets_sent: MetricField[int] = UNAVAILABLE
    packets_recv: MetricField[int] = UNAVAILABLE
    errors_in: MetricField[int] = UNAVAILABLE
    errors_out: MetricField[int] = UNAVAILABLE

    def is_empty(self) -> bool:
        return not any(
            isinstance(getattr(self, f.name), Present)
            for f in fields(self) if f.name != "name"
        )

    @property
    def label(self) -> str:
        return f"Network {self.name}"

    @classmethod
    def unavailable(cls, name: str) -> "NetworkSnapshot":
        return cls(name=name)
