"""Fold per-component verdicts into the report model."""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .snapshots import ComponentKind, SystemSnapshot
from .verdict import Issue, Status, Verdict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentVerdict:
    """Verdict for one scanned component instance."""
    kind: ComponentKind
    label: str
    verdict: Verdict


@dataclass(frozen=True)
class ReportModel:
    """Renderer-agnostic result of one scan.

    ``critical_issues`` and ``warnings`` keep the scan order of their
    entries. An empty ``per_component_verdicts`` means nothing could be
    scanned: such a report is inconclusive even though it has no issues.
    """
    system_identity: Optional[SystemSnapshot] = None
    per_component_verdicts: Tuple[ComponentVerdict, ...] = ()
    critical_issues: Tuple[Issue, ...] = ()
    warnings: Tuple[Issue, ...] = ()
    not_applicable: Tuple[ComponentKind, ...] = ()

    @property
    def overall_healthy(self) -> bool:
        return not self.critical_issues and not self.warnings

    @property
    def is_conclusive(self) -> bool:
        return bool(self.per_component_verdicts)

    @classmethod
    def empty(cls) -> "ReportModel":
        """Report for a scan where no component could be acquired."""
        return cls()


def aggregate(entries: Iterable[ComponentVerdict],
              system_identity: Optional[SystemSnapshot] = None,
              not_applicable: Iterable[ComponentKind] = ()) -> ReportModel:
    """Partition verdicts into critical and warning issues, keeping input order."""
    verdicts = []
    critical = []
    warnings = []
    for entry in entries:
        verdicts.append(entry)
        issue = Issue(entry.label, entry.verdict)
        if entry.verdict.status is Status.CRITICAL:
            critical.append(issue)
        elif entry.verdict.status is Status.WARNING:
            warnings.append(issue)

    logger.debug("Aggregated %d verdicts: %d critical, %d warnings",
                 len(verdicts), len(critical), len(warnings))
    return ReportModel(
        system_identity=system_identity,
        per_component_verdicts=tuple(verdicts),
        critical_issues=tuple(critical),
        warnings=tuple(warnings),
        not_applicable=tuple(not_applicable),
    )
