"""Summary renderer for aggregation output."""

from pathlib import Path

from rich.table import Table

from cli.display.console import console


class SummaryRenderer:
    """Render aggregation summaries for the fetch command."""

    def render_summary(self, summary: dict) -> None:
        """Render resource and entry counts.

        Args:
            summary: Dictionary from AggregateCalendar.summary()
        """
        console.print()
        console.print("━" * 40)
        console.print("[bold]  Aggregation[/bold]")
        console.print("━" * 40)

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Label", style="dim", width=18)
        table.add_column("Value")

        requested = summary["resources_requested"]
        failed = summary["resources_failed"]
        resources = f"{summary['resources_succeeded']}/{requested}"
        if failed:
            resources += f" [red]({failed} failed)[/red]"
        table.add_row("Resources", resources)
        table.add_row("Events", str(summary["events"]))
        table.add_row("Timezones", str(summary["timezones"]))
        if summary["entries_dropped"]:
            table.add_row("Dropped", f"[yellow]{summary['entries_dropped']}[/yellow]")

        console.print(table)

    def render_written(self, path: Path) -> None:
        console.print(
            f"\n[green bold]✓[/green bold] Calendar written to {path.resolve()}"
        )
