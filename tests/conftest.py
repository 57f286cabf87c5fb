"""Shared fixtures: an in-memory metrics provider and healthy snapshots."""

from __future__ import annotations

import pytest

from hwhealth.core.errors import AcquisitionFault
from hwhealth.core.metric_field import present
from hwhealth.core.snapshots import (
    BatterySnapshot,
    CpuSnapshot,
    DiskSnapshot,
    MemorySnapshot,
    NetworkSnapshot,
    SystemSnapshot,
)


def healthy_system() -> SystemSnapshot:
    return SystemSnapshot(
        hostname=present("workstation"),
        os_name=present("Linux"),
        os_version=present("6.1.0"),
        architecture=present("x86_64"),
        uptime_hours=present(12.5),
    )


def healthy_cpu() -> CpuSnapshot:
    return CpuSnapshot(temperature_c=present(45.0), load=present("12%"))


def healthy_memory() -> MemorySnapshot:
    return MemorySnapshot(
        total_bytes=present(16_000_000_000),
        available_bytes=present(8_000_000_000),
    )


def disk(mountpoint: str, free_gb: float) -> DiskSnapshot:
    return DiskSnapshot(
        device=mountpoint,
        mountpoint=present(mountpoint),
        total_gb=present(500.0),
        free_gb=present(free_gb),
    )


def healthy_battery() -> BatterySnapshot:
    return BatterySnapshot(
        status=present("Charging"),
        design_capacity=present(50000.0),
        full_charge_capacity=present(48000.0),
    )


def adapter(name: str) -> NetworkSnapshot:
    return NetworkSnapshot(
        name=name,
        is_up=present(True),
        speed_mbps=present(1000),
        packets_sent=present(1000),
        packets_recv=present(1000),
        errors_in=present(0),
        errors_out=present(0),
    )


class FakeProvider:
    """In-memory metrics provider.

    Any attribute may be set to an Exception instance to make the
    corresponding getter raise it. ``disks`` / ``adapters`` map ids to a
    snapshot or an exception.
    """

    def __init__(self):
        self.system_snapshot = healthy_system()
        self.cpu_snapshot = healthy_cpu()
        self.memory_snapshot = healthy_memory()
        self.battery_snapshot = healthy_battery()
        self.disks = {"/": disk("/", 200.0)}
        self.adapters = {"eth0": adapter("eth0")}
        self.disk_listing_error = None
        self.adapter_listing_error = None
        self.calls = []

    @staticmethod
    def _give(value):
        if isinstance(value, Exception):
            raise value
        return value

    def system(self):
        self.calls.append("system")
        return self._give(self.system_snapshot)

    def cpu(self):
        self.calls.append("cpu")
        return self._give(self.cpu_snapshot)

    def memory(self):
        self.calls.append("memory")
        return self._give(self.memory_snapshot)

    def disk_ids(self):
        self.calls.append("disk_ids")
        if self.disk_listing_error:
            raise self.disk_listing_error
        return list(self.disks)

    def disk(self, disk_id):
        self.calls.append(f"disk:{disk_id}")
        return self._give(self.disks[disk_id])

    def battery(self):
        self.calls.append("battery")
        return self._give(self.battery_snapshot)

    def adapter_ids(self):
        self.calls.append("adapter_ids")
        if self.adapter_listing_error:
            raise self.adapter_listing_error
        return list(self.adapters)

    def adapter(self, adapter_id):
        self.calls.append(f"adapter:{adapter_id}")
        return self._give(self.adapters[adapter_id])


def fault(component: str = "component") -> AcquisitionFault:
    return AcquisitionFault(component, "sensor read failed")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def dead_provider() -> FakeProvider:
    """Provider that fails for every component."""
    p = FakeProvider()
    p.system_snapshot = fault("System")
    p.cpu_snapshot = fault("CPU")
    p.memory_snapshot = fault("Memory")
    p.battery_snapshot = fault("Battery")
    p.disk_listing_error = fault("Disk")
    p.adapter_listing_error = fault("Network")
    return p
