"""Health rules mapping component snapshots to verdicts.

Each component kind has an ordered list of rules. Rules are checked top
to bottom and the first one whose predicate holds decides the verdict;
when none match the component is healthy. Every ``evaluate_*`` function
returns exactly one Verdict and never raises: faults become ``UNKNOWN``
verdicts carrying the fault text.
"""
import functools
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from ..config.threshold_config import ThresholdConfig
from .errors import EvaluationFault
from .metric_field import Present, exceeds, below, value_or
from .snapshots import (BatterySnapshot, CpuSnapshot, DiskSnapshot,
                        MemorySnapshot, NetworkSnapshot, SystemSnapshot)
from .verdict import Priority, Status, Verdict

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS = ThresholdConfig()

_BATTERY_FAILURE = re.compile(r"fail|critical", re.IGNORECASE)


@dataclass(frozen=True)
class Rule:
    """One ordered health rule: if ``predicate`` holds, emit this verdict."""
    name: str
    predicate: Callable[[Any], bool]
    status: Status
    priority: Priority
    message: Callable[[Any], str]

    def verdict_for(self, snapshot) -> Verdict:
        return Verdict(self.status, self.message(snapshot), self.priority)


def first_match(rules: Sequence[Rule], snapshot, default: Callable[[Any], Verdict]) -> Verdict:
    """Return the verdict of the first matching rule, else ``default(snapshot)``."""
    for rule in rules:
        if rule.predicate(snapshot):
            logger.debug("Rule %s matched", rule.name)
            return rule.verdict_for(snapshot)
    return default(snapshot)


def _never_raises(evaluator):
    """Convert any fault inside an evaluator into an UNKNOWN verdict."""
    @functools.wraps(evaluator)
    def wrapper(snapshot, thresholds: Optional[ThresholdConfig] = None) -> Verdict:
        try:
            if snapshot.is_empty():
                raise EvaluationFault(f"no {snapshot.label} readings available")
            return evaluator(snapshot, thresholds or DEFAULT_THRESHOLDS)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Evaluation of %s failed: %s", getattr(snapshot, "label", snapshot), reason)
            return Verdict.unknown(reason)
    return wrapper


def _temperature(snapshot: CpuSnapshot) -> float:
    return value_or(snapshot.temperature_c)


def parse_load_percent(load) -> Optional[float]:
    """Parse a display load such as '95%' into a number, or None.

    Every character except digits and the decimal point is stripped, so
    '42.5%' reads as 42.5 rather than 425.
    """
    text = value_or(load)
    if text is None:
        return None
    digits = re.sub(r"[^0-9.]", "", str(text))
    try:
        return float(digits)
    except ValueError:
        return None


def cpu_rules(t: ThresholdConfig) -> List[Rule]:
    def high_load_and_warm(s: CpuSnapshot) -> bool:
        load = parse_load_percent(s.load)
        return (load is not None and load > t.cpu_load_warning
                and exceeds(s.temperature_c, t.cpu_load_temp_warning))

    return [
        Rule("cpu-temperature-critical",
             lambda s: exceeds(s.temperature_c, t.cpu_temp_critical),
             Status.CRITICAL, Priority.HIGH,
             lambda s: f"CPU temperature too high ({_temperature(s):.1f}°C)."),
        Rule("cpu-temperature-warning",
             lambda s: exceeds(s.temperature_c, t.cpu_temp_warning),
             Status.WARNING, Priority.MEDIUM,
             lambda s: f"CPU temperature elevated ({_temperature(s):.1f}°C)."),
        Rule("cpu-load-temperature",
             high_load_and_warm,
             Status.WARNING, Priority.MEDIUM,
             lambda s: (f"CPU high usage with elevated temperature "
                        f"({value_or(s.load)} at {_temperature(s):.1f}°C).")),
    ]


def _cpu_healthy(s: CpuSnapshot) -> Verdict:
    if isinstance(s.temperature_c, Present):
        return Verdict.healthy(f"CPU operating normally ({_temperature(s):.1f}°C).")
    return Verdict.healthy("CPU operating normally (temperature not reported).")


@_never_raises
def evaluate_cpu(snapshot: CpuSnapshot, thresholds: ThresholdConfig) -> Verdict:
    return first_match(cpu_rules(thresholds), snapshot, _cpu_healthy)


def memory_used_percent(snapshot: MemorySnapshot) -> Optional[float]:
    """Used physical memory in percent, or None when totals are missing."""
    total = value_or(snapshot.total_bytes)
    available = value_or(snapshot.available_bytes)
    if total is None or available is None or total <= 0 or available <= 0:
        return None
    return (total - available) * 100 / total


def memory_rules(t: ThresholdConfig) -> List[Rule]:
    def used_above(s: MemorySnapshot) -> bool:
        used = memory_used_percent(s)
        return used is not None and used > t.memory_used_warning

    return [
        Rule("memory-usage-warning", used_above,
             Status.WARNING, Priority.MEDIUM,
             lambda s: f"Memory usage very high ({memory_used_percent(s):.1f}% used)."),
    ]


def _memory_healthy(s: MemorySnapshot) -> Verdict:
    used = memory_used_percent(s)
    if used is None:
        return Verdict.healthy("Memory usage could not be computed.")
    return Verdict.healthy(f"Memory usage normal ({used:.1f}% used).")


@_never_raises
def evaluate_memory(snapshot: MemorySnapshot, thresholds: ThresholdConfig) -> Verdict:
    return first_match(memory_rules(thresholds), snapshot, _memory_healthy)


def disk_rules(t: ThresholdConfig) -> List[Rule]:
    return [
        Rule("disk-space-critical",
             lambda s: below(s.free_gb, t.disk_free_critical_gb),
             Status.CRITICAL, Priority.HIGH,
             lambda s: f"{s.label} space critically low ({value_or(s.free_gb):.2f} GB free)."),
        Rule("disk-space-warning",
             lambda s: below(s.free_gb, t.disk_free_warning_gb),
             Status.WARNING, Priority.MEDIUM,
             lambda s: f"{s.label} space running low ({value_or(s.free_gb):.2f} GB free)."),
    ]


def _disk_healthy(s: DiskSnapshot) -> Verdict:
    free = value_or(s.free_gb)
    if free is None:
        return Verdict.healthy(f"{s.label} free space not reported.")
    return Verdict.healthy(f"{s.label} has sufficient space ({free:.2f} GB free).")


@_never_raises
def evaluate_disk(snapshot: DiskSnapshot, thresholds: ThresholdConfig) -> Verdict:
    return first_match(disk_rules(thresholds), snapshot, _disk_healthy)


def battery_capacity_ratio(snapshot: BatterySnapshot) -> Optional[float]:
    """Full-charge capacity as a fraction of design capacity, or None."""
    design = value_or(snapshot.design_capacity)
    full = value_or(snapshot.full_charge_capacity)
    if design is None or full is None or design <= 0 or full <= 0:
        return None
    return full / design


def battery_rules(t: ThresholdConfig) -> List[Rule]:
    def failing(s: BatterySnapshot) -> bool:
        status = value_or(s.status)
        return status is not None and _BATTERY_FAILURE.search(str(status)) is not None

    def worn(s: BatterySnapshot) -> bool:
        if battery_capacity_ratio(s) is None:
            return False
        design = value_or(s.design_capacity)
        return value_or(s.full_charge_capacity) < design * t.battery_capacity_ratio_warning

    return [
        Rule("battery-failing", failing,
             Status.CRITICAL, Priority.HIGH,
             lambda s: f"Battery needs replacement (status: {value_or(s.status)})."),
        Rule("battery-capacity-warning", worn,
             Status.WARNING, Priority.MEDIUM,
             lambda s: (f"Battery capacity significantly reduced "
                        f"({battery_capacity_ratio(s) * 100:.0f}% of design).")),
    ]


def _battery_healthy(s: BatterySnapshot) -> Verdict:
    ratio = battery_capacity_ratio(s)
    if ratio is None:
        return Verdict.healthy("Battery operating normally.")
    return Verdict.healthy(f"Battery operating normally ({ratio * 100:.0f}% of design capacity).")


@_never_raises
def evaluate_battery(snapshot: BatterySnapshot, thresholds: ThresholdConfig) -> Verdict:
    return first_match(battery_rules(thresholds), snapshot, _battery_healthy)


def network_error_rate(snapshot: NetworkSnapshot) -> Optional[float]:
    """Errors as a percentage of all packets, or None without counters."""
    counters = [value_or(f) for f in (snapshot.errors_in, snapshot.errors_out,
                                      snapshot.packets_sent, snapshot.packets_recv)]
    if any(c is None for c in counters):
        return None
    errors_in, errors_out, sent, recv = counters
    packets = sent + recv
    if packets <= 0:
        return None
    return (errors_in + errors_out) / packets * 100


def network_rules(t: ThresholdConfig) -> List[Rule]:
    if t.network_error_rate_warning is None:
        return []

    def error_rate_above(s: NetworkSnapshot) -> bool:
        rate = network_error_rate(s)
        return rate is not None and rate > t.network_error_rate_warning

    return [
        Rule("network-error-rate-warning", error_rate_above,
             Status.WARNING, Priority.MEDIUM,
             lambda s: f"{s.label} error rate high ({network_error_rate(s):.2f}% of packets)."),
    ]


def _network_healthy(s: NetworkSnapshot) -> Verdict:
    is_up = value_or(s.is_up)
    if is_up is None:
        return Verdict.healthy(f"{s.label} link state not reported.")
    if not is_up:
        return Verdict.healthy(f"{s.label} is down (advisory only).")
    speed = value_or(s.speed_mbps)
    if speed:
        return Verdict.healthy(f"{s.label} is up at {speed} Mbps.")
    return Verdict.healthy(f"{s.label} is up.")


@_never_raises
def evaluate_network(snapshot: NetworkSnapshot, thresholds: ThresholdConfig) -> Verdict:
    return first_match(network_rules(thresholds), snapshot, _network_healthy)


@_never_raises
def evaluate_system(snapshot: SystemSnapshot, thresholds: ThresholdConfig) -> Verdict:
    host = value_or(snapshot.hostname, "unknown host")
    os_name = value_or(snapshot.os_name, "unknown OS")
    os_version = value_or(snapshot.os_version, "")
    return Verdict.healthy(f"{host} running {os_name} {os_version}".strip() + ".")


_EVALUATORS = {
    SystemSnapshot: evaluate_system,
    CpuSnapshot: evaluate_cpu,
    MemorySnapshot: evaluate_memory,
    DiskSnapshot: evaluate_disk,
    BatterySnapshot: evaluate_battery,
    NetworkSnapshot: evaluate_network,
}


def evaluate(snapshot, thresholds: Optional[ThresholdConfig] = None) -> Verdict:
    """Evaluate any snapshot with the evaluator registered for its kind."""
    evaluator = _EVALUATORS.get(type(snapshot))
    if evaluator is None:
        reason = f"no evaluator for {type(snapshot).__name__}"
        logger.warning("Evaluation failed: %s", reason)
        return Verdict.unknown(reason)
    return evaluator(snapshot, thresholds)
