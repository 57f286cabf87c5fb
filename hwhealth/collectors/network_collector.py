"""Network adapter collector using psutil interface counters."""
import logging
from typing import List

import psutil

from ..config.collection_config import CollectionConfig
from ..core.errors import AcquisitionFault
from ..core.metric_field import from_optional
from ..core.snapshots import NetworkSnapshot

logger = logging.getLogger(__name__)


class NetworkCollector:
    """Collects link state and traffic counters per network adapter."""

    def __init__(self, config: CollectionConfig):
        """Initialize the network collector."""
        self.config = config

    def adapter_ids(self) -> List[str]:
        """List adapters in the order psutil reports them, skipping loopback."""
        try:
            stats = psutil.net_if_stats()
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault("Network", str(exc)) from exc

        names = []
        for name, stat in stats.items():
            if self._is_loopback(name):
                continue
            if not stat.isup and not self.config.include_down_adapters:
                continue
            names.append(name)
        return names

    def adapter(self, name: str) -> NetworkSnapshot:
        """Build the snapshot for one adapter."""
        try:
            stat = psutil.net_if_stats().get(name)
            counters = psutil.net_io_counters(pernic=True).get(name)
        except (OSError, RuntimeError) as exc:
            raise AcquisitionFault(f"Network {name}", str(exc)) from exc

        if stat is None:
            raise AcquisitionFault(f"Network {name}", "adapter disappeared")

        return NetworkSnapshot(
            name=name,
            is_up=from_optional(stat.isup),
            # psutil reports 0 when the speed cannot be determined
            speed_mbps=from_optional(stat.speed or None),
            bytes_sent=from_optional(counters.bytes_sent if counters else None),
            bytes_recv=from_optional(counters.bytes_recv if counters else None),
            packets_sent=from_optional(counters.packets_sent if counters else None),
            packets_recv=from_optional(counters.packets_recv if counters else None),
            errors_in=from_optional(counters.errin if counters else None),
            errors_out=from_optional(counters.errout if counters else None),
        )

    @staticmethod
    def _is_loopback(name: str) -> bool:
        return name == "lo" or name.lower().startswith("loopback")
