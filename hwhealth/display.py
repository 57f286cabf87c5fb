"""Report rendering using Rich for text and HTML output."""
import io
import json
from datetime import datetime
from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config.display_config import DisplayConfig
from .core.aggregator import ReportModel
from .core.metric_field import value_or
from .core.verdict import Issue, Status

STATUS_STYLES = {
    Status.CRITICAL: "bold red",
    Status.WARNING: "yellow",
    Status.HEALTHY: "green",
    Status.UNKNOWN: "dim",
}

FORMATS = ("text", "html", "json")


def report_to_dict(report: ReportModel, generated_at: Optional[datetime] = None) -> dict:
    """Convert a report into plain JSON-serializable data."""
    identity = None
    if report.system_identity is not None:
        s = report.system_identity
        identity = {
            "hostname": value_or(s.hostname),
            "os_name": value_or(s.os_name),
            "os_version": value_or(s.os_version),
            "architecture": value_or(s.architecture),
            "uptime_hours": value_or(s.uptime_hours),
        }

    def issue_dict(issue: Issue) -> dict:
        return {
            "component": issue.component_label,
            "status": issue.verdict.status.value,
            "priority": issue.verdict.priority.value,
            "message": issue.verdict.message,
        }

    data = {
        "system": identity,
        "overall_healthy": report.overall_healthy,
        "conclusive": report.is_conclusive,
        "components": [
            {
                "kind": entry.kind.value,
                "label": entry.label,
                "status": entry.verdict.status.value,
                "priority": entry.verdict.priority.value,
                "message": entry.verdict.message,
            }
            for entry in report.per_component_verdicts
        ],
        "critical_issues": [issue_dict(i) for i in report.critical_issues],
        "warnings": [issue_dict(i) for i in report.warnings],
        "not_applicable": [kind.value for kind in report.not_applicable],
    }
    if generated_at is not None:
        data["generated_at"] = generated_at.isoformat(timespec="seconds")
    return data


class ReportRenderer:
    """Builds Rich renderables for a report and exports them."""

    def __init__(self, config: Optional[DisplayConfig] = None):
        """Initialize the renderer."""
        self.config = config or DisplayConfig()

    def build(self, report: ReportModel, generated_at: Optional[datetime] = None) -> Group:
        """Create the full report layout."""
        generated_at = generated_at or datetime.now()
        parts = [
            self._create_system_panel(report, generated_at),
            self._create_summary(report),
        ]
        if report.critical_issues:
            parts.append(self._create_issue_panel("Critical Issues", report.critical_issues, "red"))
        if report.warnings:
            parts.append(self._create_issue_panel("Warnings", report.warnings, "yellow"))
        if report.is_conclusive:
            parts.append(self._create_component_table(report))
        return Group(*parts)

    def render(self, report: ReportModel, console: Optional[Console] = None,
               generated_at: Optional[datetime] = None):
        """Print the report to a console."""
        console = console or Console(no_color=not self.config.show_colors)
        console.print(self.build(report, generated_at))

    def to_text(self, report: ReportModel, generated_at: Optional[datetime] = None) -> str:
        return self._record(report, generated_at).export_text()

    def to_html(self, report: ReportModel, generated_at: Optional[datetime] = None) -> str:
        return self._record(report, generated_at).export_html(inline_styles=True)

    def to_json(self, report: ReportModel, generated_at: Optional[datetime] = None) -> str:
        return json.dumps(report_to_dict(report, generated_at), indent=2)

    def export(self, report: ReportModel, fmt: str,
               generated_at: Optional[datetime] = None) -> str:
        """Render the report in one of FORMATS."""
        if fmt == "text":
            return self.to_text(report, generated_at)
        if fmt == "html":
            return self.to_html(report, generated_at)
        if fmt == "json":
            return self.to_json(report, generated_at)
        raise ValueError(f"unknown report format: {fmt}")

    def _record(self, report: ReportModel, generated_at: Optional[datetime]) -> Console:
        console = Console(record=True, file=io.StringIO(), width=110,
                          no_color=not self.config.show_colors)
        console.print(self.build(report, generated_at))
        return console

    def _create_system_panel(self, report: ReportModel, generated_at: datetime) -> Panel:
        """Create the header panel with the machine identity."""
        lines: List[str] = []
        identity = report.system_identity
        if identity is None:
            lines.append("System identity unavailable")
        else:
            lines.append(f"Host:     {value_or(identity.hostname, 'unknown')}")
            lines.append(f"OS:       {value_or(identity.os_name, 'unknown')} "
                         f"{value_or(identity.os_version, '')}".rstrip())
            lines.append(f"Arch:     {value_or(identity.architecture, 'unknown')}")
            uptime = value_or(identity.uptime_hours)
            if uptime is not None:
                lines.append(f"Uptime:   {uptime:.1f} h")
        return Panel(
            Text("\n".join(lines)),
            title=f"{self.config.title} - {generated_at.strftime(self.config.time_format)}",
            border_style="blue",
        )

    def _create_summary(self, report: ReportModel) -> Text:
        """One-line overall result."""
        if not report.is_conclusive:
            return Text("Overall: INCONCLUSIVE (no component could be scanned)", style="bold magenta")
        if report.overall_healthy:
            return Text("Overall: HEALTHY", style="bold green")
        return Text(
            f"Overall: ISSUES FOUND ({len(report.critical_issues)} critical, "
            f"{len(report.warnings)} warnings)",
            style="bold red" if report.critical_issues else "bold yellow",
        )

    def _create_issue_panel(self, title: str, issues, border_style: str) -> Panel:
        lines = [
            f"[{issue.verdict.priority.value}] {issue.component_label}: {issue.verdict.message}"
            for issue in issues
        ]
        return Panel(Text("\n".join(lines)), title=f"{title} ({len(issues)})",
                     border_style=border_style)

    def _create_component_table(self, report: ReportModel) -> Table:
        """Create the per-component verdict table."""
        table = Table(title="Components", expand=True)
        table.add_column("Component", no_wrap=True)
        table.add_column("Status", no_wrap=True)
        table.add_column("Priority", no_wrap=True)
        table.add_column("Details")

        for entry in report.per_component_verdicts:
            status = entry.verdict.status
            if status is Status.HEALTHY and not self.config.show_healthy:
                continue
            table.add_row(
                entry.label,
                Text(status.value, style=STATUS_STYLES[status]),
                entry.verdict.priority.value,
                entry.verdict.message,
            )
        for kind in report.not_applicable:
            table.add_row(kind.value, Text("N/A", style="dim"), "-", "Not present on this machine")
        return table
