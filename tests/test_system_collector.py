"""Tests for the psutil metrics provider (psutil mocked)."""

from __future__ import annotations

from collections import namedtuple
from unittest import mock

import pytest

from hwhealth.collectors import battery_collector
from hwhealth.collectors.network_collector import NetworkCollector
from hwhealth.collectors.system_collector import BYTES_PER_GB, SystemCollector
from hwhealth.config.collection_config import CollectionConfig
from hwhealth.core.errors import AcquisitionFault
from hwhealth.core.metric_field import UNAVAILABLE, Present, value_or

Partition = namedtuple("Partition", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")
Temp = namedtuple("Temp", "label current high critical")
Battery = namedtuple("Battery", "percent secsleft power_plugged")
IfStats = namedtuple("IfStats", "isup duplex speed mtu")
IoCounters = namedtuple("IoCounters",
                        "bytes_sent bytes_recv packets_sent packets_recv errin errout dropin dropout")

PSUTIL = "hwhealth.collectors.system_collector.psutil"
NET_PSUTIL = "hwhealth.collectors.network_collector.psutil"


@pytest.fixture
def collector():
    return SystemCollector(CollectionConfig(cpu_sample_interval=0))


class TestCpu:

    def test_cpu_snapshot(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.cpu_percent.return_value = 95.4
            ps.cpu_count.return_value = 8
            ps.sensors_temperatures.return_value = {"coretemp": [Temp("Package", 71.0, 90, 100)]}
            snap = collector.cpu()
        assert snap.load == Present("95%")
        assert snap.temperature_c == Present(71.0)
        assert snap.logical_cores == Present(8)

    def test_missing_temperature_sensor(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.cpu_percent.return_value = 10.0
            ps.cpu_count.return_value = 4
            ps.sensors_temperatures.return_value = {"nvme": [Temp("Composite", 40.0, 80, 90)]}
            snap = collector.cpu()
        assert snap.temperature_c is UNAVAILABLE

    def test_sensors_not_supported(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.cpu_percent.return_value = 10.0
            ps.cpu_count.return_value = 4
            ps.sensors_temperatures.side_effect = AttributeError
            snap = collector.cpu()
        assert snap.temperature_c is UNAVAILABLE

    def test_cpu_failure_raises_acquisition_fault(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.cpu_percent.side_effect = OSError("no /proc")
            with pytest.raises(AcquisitionFault):
                collector.cpu()


class TestMemory:

    def test_memory_snapshot(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.virtual_memory.return_value = mock.MagicMock(total=16_000, available=4_000)
            snap = collector.memory()
        assert snap.total_bytes == Present(16_000)
        assert snap.available_bytes == Present(4_000)


class TestDisk:

    def test_disk_ids_skip_pseudo_filesystems(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.disk_partitions.return_value = [
                Partition("/dev/sda1", "/", "ext4", "rw"),
                Partition("/dev/loop0", "/snap/core", "squashfs", "ro"),
                Partition("/dev/sdb1", "/data", "xfs", "rw"),
                Partition("/dev/sda1", "/", "ext4", "rw"),
            ]
            assert collector.disk_ids() == ["/", "/data"]

    def test_disk_snapshot_in_gb(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.disk_usage.return_value = Usage(500 * BYTES_PER_GB, 495 * BYTES_PER_GB,
                                               5 * BYTES_PER_GB, 99.0)
            ps.disk_partitions.return_value = [Partition("/dev/sda1", "/", "ext4", "rw")]
            snap = collector.disk("/")
        assert snap.free_gb == Present(5.0)
        assert snap.total_gb == Present(500.0)
        assert snap.device == "/dev/sda1"
        assert snap.label == "Disk /"

    def test_unreadable_disk(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.disk_usage.side_effect = PermissionError("denied")
            with pytest.raises(AcquisitionFault, match="Disk /mnt/secret"):
                collector.disk("/mnt/secret")

    def test_partition_listing_failure(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.disk_usage.return_value = Usage(100 * BYTES_PER_GB, 50 * BYTES_PER_GB,
                                               50 * BYTES_PER_GB, 50.0)
            ps.disk_partitions.side_effect = OSError("mount table unreadable")
            with pytest.raises(AcquisitionFault, match="Disk /data"):
                collector.disk("/data")


class TestBattery:

    def test_no_battery(self, collector):
        with mock.patch(PSUTIL) as ps:
            ps.sensors_battery.return_value = None
            assert collector.battery() is None

    def test_battery_with_sysfs_details(self, collector):
        details = {"status": "Discharging", "design_capacity": 50000.0,
                   "full_charge_capacity": 20000.0}
        with mock.patch(PSUTIL) as ps, \
                mock.patch("hwhealth.collectors.system_collector.read_battery_details",
                           return_value=details):
            ps.sensors_battery.return_value = Battery(80.0, 3600, False)
            snap = collector.battery()
        assert snap.status == Present("Discharging")
        assert snap.charge_percent == Present(80.0)
        assert snap.full_charge_capacity == Present(20000.0)

    def test_battery_status_falls_back_to_power_plug(self, collector):
        details = {"status": None, "design_capacity": None, "full_charge_capacity": None}
        with mock.patch(PSUTIL) as ps, \
                mock.patch("hwhealth.collectors.system_collector.read_battery_details",
                           return_value=details):
            ps.sensors_battery.return_value = Battery(50.0, 100, True)
            snap = collector.battery()
        assert snap.status == Present("Charging")
        assert snap.design_capacity is UNAVAILABLE


class TestBatteryCollector:

    def test_reads_energy_files(self, tmp_path):
        bat = tmp_path / "BAT0"
        bat.mkdir()
        (bat / "status").write_text("Full\n")
        (bat / "energy_full_design").write_text("57000000\n")
        (bat / "energy_full").write_text("41000000\n")
        details = battery_collector.read_battery_details(str(tmp_path))
        assert details == {"status": "Full", "design_capacity": 57000000.0,
                           "full_charge_capacity": 41000000.0}

    def test_falls_back_to_charge_files(self, tmp_path):
        bat = tmp_path / "BAT1"
        bat.mkdir()
        (bat / "charge_full_design").write_text("4000000")
        (bat / "charge_full").write_text("3900000")
        details = battery_collector.read_battery_details(str(tmp_path))
        assert details["status"] is None
        assert details["design_capacity"] == 4000000.0

    def test_non_numeric_value_is_ignored(self, tmp_path):
        bat = tmp_path / "BAT0"
        bat.mkdir()
        (bat / "energy_full_design").write_text("unknown")
        assert battery_collector.read_battery_details(str(tmp_path))["design_capacity"] is None

    def test_no_battery_directory(self, tmp_path):
        (tmp_path / "AC").mkdir()
        details = battery_collector.read_battery_details(str(tmp_path))
        assert details == {"status": None, "design_capacity": None, "full_charge_capacity": None}


class TestNetwork:

    STATS = {
        "lo": IfStats(True, 0, 0, 65536),
        "eth0": IfStats(True, 2, 1000, 1500),
        "wlan0": IfStats(False, 0, 0, 1500),
    }
    COUNTERS = {
        "eth0": IoCounters(100, 200, 10, 20, 1, 0, 0, 0),
    }

    def test_adapter_ids_skip_loopback_and_down(self):
        with mock.patch(NET_PSUTIL) as ps:
            ps.net_if_stats.return_value = self.STATS
            assert NetworkCollector(CollectionConfig()).adapter_ids() == ["eth0"]

    def test_include_down_adapters(self):
        with mock.patch(NET_PSUTIL) as ps:
            ps.net_if_stats.return_value = self.STATS
            ids = NetworkCollector(CollectionConfig(include_down_adapters=True)).adapter_ids()
        assert ids == ["eth0", "wlan0"]

    def test_adapter_snapshot(self):
        with mock.patch(NET_PSUTIL) as ps:
            ps.net_if_stats.return_value = self.STATS
            ps.net_io_counters.return_value = self.COUNTERS
            snap = NetworkCollector(CollectionConfig()).adapter("eth0")
        assert snap.is_up == Present(True)
        assert snap.speed_mbps == Present(1000)
        assert value_or(snap.errors_in) == 1

    def test_adapter_without_counters_or_speed(self):
        with mock.patch(NET_PSUTIL) as ps:
            ps.net_if_stats.return_value = self.STATS
            ps.net_io_counters.return_value = {}
            snap = NetworkCollector(CollectionConfig()).adapter("wlan0")
        assert snap.speed_mbps is UNAVAILABLE
        assert snap.bytes_sent is UNAVAILABLE

    def test_vanished_adapter(self):
        with mock.patch(NET_PSUTIL) as ps:
            ps.net_if_stats.return_value = {}
            ps.net_io_counters.return_value = {}
            with pytest.raises(AcquisitionFault, match="disappeared"):
                NetworkCollector(CollectionConfig()).adapter("eth9")


class TestSystem:

    def test_system_snapshot(self, collector):
        with mock.patch(PSUTIL) as ps, \
                mock.patch("hwhealth.collectors.system_collector.socket.gethostname",
                           return_value="box"):
            ps.boot_time.return_value = 0.0
            snap = collector.system()
        assert snap.hostname == Present("box")
        assert isinstance(snap.uptime_hours, Present)
