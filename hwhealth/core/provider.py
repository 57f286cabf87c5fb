"""Interface between the scan orchestrator and a metrics provider."""
from typing import Iterable, Optional, Protocol

from .snapshots import (BatterySnapshot, CpuSnapshot, DiskSnapshot,
                        MemorySnapshot, NetworkSnapshot, SystemSnapshot)


class MetricsProvider(Protocol):
    """Supplies one snapshot per component kind or instance.

    Getters raise ``AcquisitionFault`` when a snapshot cannot be produced.
    ``battery()`` returns None on machines without battery hardware.
    """

    def system(self) -> SystemSnapshot: ...

    def cpu(self) -> CpuSnapshot: ...

    def memory(self) -> MemorySnapshot: ...

    def disk_ids(self) -> Iterable[str]: ...

    def disk(self, disk_id: str) -> DiskSnapshot: ...

    def battery(self) -> Optional[BatterySnapshot]: ...

    def adapter_ids(self) -> Iterable[str]: ...

    def adapter(self, adapter_id: str) -> NetworkSnapshot: ...
