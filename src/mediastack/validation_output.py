from __future__ import annotations

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .validation import ValidationIssue, ValidationReport


class ValidationFormatter:
    """Renders a ValidationReport as rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def format_report(self, report: ValidationReport) -> None:
        if report.errors:
            self._format_issues(report.errors, "Validation Errors", "bold red")
        if report.warnings:
            self._format_issues(report.warnings, "Validation Warnings", "bold yellow")

        if not report.errors and not report.warnings:
            self.console.print("[bold green]✓ Configuration passed validation.[/bold green]")
        elif not report.errors:
            self.console.print("[bold green]✓ Configuration passed validation (with warnings).[/bold green]")

    def _format_issues(self, issues: List[ValidationIssue], header_text: str, header_style: str) -> None:
        table = Table(title=f"[{header_style}]{header_text}[/{header_style}]", title_justify="left")
        table.add_column("Path", style="cyan", no_wrap=True)
        table.add_column("Code", style="dim")
        table.add_column("Message")
        for issue in issues:
            table.add_row(issue.path, issue.code, issue.message)
        self.console.print(table)
