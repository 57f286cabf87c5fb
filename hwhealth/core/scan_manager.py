"""Scan orchestration: acquire snapshots, evaluate them, build the report."""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Tuple

from ..config.config import Config
from .aggregator import ComponentVerdict, ReportModel, aggregate
from .provider import MetricsProvider
from .rules import evaluate
from .snapshots import (BatterySnapshot, ComponentKind, CpuSnapshot,
                        MemorySnapshot, SystemSnapshot)

logger = logging.getLogger(__name__)

_SINGLETON_CLASSES = {
    ComponentKind.SYSTEM: SystemSnapshot,
    ComponentKind.CPU: CpuSnapshot,
    ComponentKind.MEMORY: MemorySnapshot,
    ComponentKind.BATTERY: BatterySnapshot,
}


class ScanManager:
    """Runs one scan in the fixed order System, CPU, Memory, Disk, Battery, Network."""

    def __init__(self, provider: MetricsProvider, config: Optional[Config] = None):
        """Initialize the scan manager with a metrics provider."""
        self.provider = provider
        self.config = config or Config()

    def run_scan(self) -> ReportModel:
        """Scan every component; single failures never abort the run."""
        entries: List[ComponentVerdict] = []
        not_applicable: List[ComponentKind] = []
        acquired_any = False

        system, ok = self._acquire_singleton(ComponentKind.SYSTEM, self.provider.system)
        acquired_any |= ok
        self._evaluate_into(entries, system)

        for kind, fetch in ((ComponentKind.CPU, self.provider.cpu),
                            (ComponentKind.MEMORY, self.provider.memory)):
            snapshot, ok = self._acquire_singleton(kind, fetch)
            acquired_any |= ok
            self._evaluate_into(entries, snapshot)

        disks = self._acquire_instances(ComponentKind.DISK, self.provider.disk_ids, self.provider.disk)
        acquired_any |= bool(disks)
        for disk in disks:
            self._evaluate_into(entries, disk)

        battery, ok = self._acquire_singleton(ComponentKind.BATTERY, self.provider.battery)
        if ok and battery is None:
            logger.info("No battery present; battery check not applicable")
            not_applicable.append(ComponentKind.BATTERY)
        else:
            acquired_any |= ok
            self._evaluate_into(entries, battery)

        adapters = self._acquire_instances(ComponentKind.NETWORK, self.provider.adapter_ids,
                                           self.provider.adapter)
        acquired_any |= bool(adapters)
        for adapter in adapters:
            self._evaluate_into(entries, adapter)

        if not acquired_any:
            logger.error("Metrics provider unavailable for every component; report is inconclusive")
            return ReportModel.empty()

        report = aggregate(entries, system_identity=system if not system.is_empty() else None,
                           not_applicable=not_applicable)
        logger.debug("Scan complete: %d components, %d critical, %d warnings",
                     len(report.per_component_verdicts), len(report.critical_issues),
                     len(report.warnings))
        return report

    def _evaluate_into(self, entries: List[ComponentVerdict], snapshot):
        """Evaluate one snapshot and append its verdict."""
        verdict = evaluate(snapshot, self.config.thresholds)
        entries.append(ComponentVerdict(snapshot.KIND, snapshot.label, verdict))

    def _acquire_singleton(self, kind: ComponentKind, fetch: Callable) -> Tuple[object, bool]:
        """Fetch a singleton snapshot; failures yield an all-unavailable snapshot."""
        try:
            snapshot = fetch()
        except Exception as exc:
            logger.warning("Could not acquire %s metrics: %s", kind.value, exc)
            return _SINGLETON_CLASSES[kind].unavailable(), False
        if snapshot is None and kind is not ComponentKind.BATTERY:
            logger.warning("Metrics provider returned no %s snapshot", kind.value)
            return _SINGLETON_CLASSES[kind].unavailable(), False
        return snapshot, True

    def _acquire_instances(self, kind: ComponentKind, list_ids: Callable[[], Iterable[str]],
                           fetch: Callable[[str], object]) -> list:
        """Fetch every instance in provider order, skipping the ones that fail."""
        try:
            ids = list(list_ids())
        except Exception as exc:
            logger.warning("Could not enumerate %s instances: %s", kind.value, exc)
            return []

        def fetch_one(instance_id: str):
            try:
                return fetch(instance_id)
            except Exception as exc:
                logger.warning("Skipping %s %s: %s", kind.value, instance_id, exc)
                return None

        if self.config.collection.parallel_instances and len(ids) > 1:
            workers = min(self.config.collection.max_workers, len(ids))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order, so ordering matches the sequential path
                results = list(executor.map(fetch_one, ids))
        else:
            results = [fetch_one(instance_id) for instance_id in ids]

        return [snapshot for snapshot in results if snapshot is not None]
