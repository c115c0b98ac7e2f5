from typing import Optional
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.findings import AuditSummary, FindingCategory, VerbosityLevel

PATH_MISSING_HINT = (
    "The configured path was not found on disk. It may carry arguments or be "
    "an unquoted path with spaces; check the service command line manually."
)


class ResultReporter:
    """
    Formats findings and diagnostics onto a rich console.
    Holds no state besides the console, so identical calls print identical text.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report(self, service_name: str, path: Optional[str], category: FindingCategory, verbosity: int):
        if not category.is_shown(verbosity):
            return

        line = f"[{category.style}]\\[{category.label}][/] {escape(service_name)}"
        if path:
            line += f" -> {escape(path)}"
        self.console.print(line, soft_wrap=True, emoji=False)

        if category is FindingCategory.PATH_MISSING:
            self.console.print(f"    [dim]{escape(PATH_MISSING_HINT)}[/]", soft_wrap=True, emoji=False)

    def source_selected(self, source: str, verbosity: int):
        if verbosity >= VerbosityLevel.DEBUG:
            self.console.print(f"[cyan]Enumerating services with {escape(source)}[/]", soft_wrap=True, emoji=False)

    def source_unavailable(self, source: str, error: BaseException, verbosity: int):
        if verbosity >= VerbosityLevel.DEBUG:
            self.console.print(
                f"[magenta]Service source {escape(source)} unavailable:[/] {escape(str(error))}",
                soft_wrap=True,
                emoji=False,
            )

    def no_source_available(self):
        self.console.print("[bold yellow]No service source was available; nothing was audited.[/]", soft_wrap=True, emoji=False)

    def summary(self, summary: AuditSummary, verbosity: int):
        if verbosity < VerbosityLevel.VERBOSE:
            return

        table = Table(show_header=True, header_style="bold magenta",
                      title=f"Services audited via {summary.source}")
        table.add_column("Category", style="dim")
        table.add_column("Count", justify="right")
        for category, count in summary.counts.items():
            table.add_row(f"[{category.style}]{category.label}[/]", str(count))
        table.add_row("TOTAL", str(summary.total))
        self.console.print(table)
