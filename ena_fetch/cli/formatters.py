"""
Functions for formatting and displaying diagnostics on stderr using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ena_fetch.models.stats import FetchStats
from ena_fetch.utils.formatting import format_duration, format_size, pluralize


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "StructuralError": [
            "• The run has a number of FASTQ files the chosen format cannot hold.",
            "• Use `--format json` or `--format csv`, which accept any file count.",
            "• Pass `--keep-single-end` if the run is single-end.",
        ],
        "AccessionFileError": [
            "• Check that the accession file exists and is readable.",
            "• The file must be UTF-8 text with one accession per line.",
        ],
        "AccessionValidationError": [
            "• Accessions must look like SRR1234567, ERR1234567 or DRR1234567.",
            "• Study or sample accessions cannot be given directly.",
        ],
        "ConfigurationError": [
            "• Check the keys and values in your configuration file.",
            "• Supported keys: num_requests, keep_single_end, output_format, "
            "base_url, timeout.",
        ],
        "OutputWriteError": [
            "• Check that the output directory exists and is writable.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_summary_panel(console: Console, stats: FetchStats, duration_s: float):
    """Displays a summary of the resolution session."""
    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Resolved:",
        f"[bold green]{stats.accessions_succeeded}[/bold green] of "
        f"{pluralize(stats.accessions_requested, 'accession')}",
    )
    if stats.accessions_empty > 0:
        stats_table.add_row(
            "○ No Runs:", f"[yellow]{stats.accessions_empty}[/yellow]"
        )
    if stats.accessions_failed > 0:
        stats_table.add_row(
            "✗ Failed:",
            f"[bold red]{stats.accessions_failed}[/bold red] "
            f"[dim]({', '.join(stats.failed_accessions)})[/dim]",
        )
    if stats.invalid_lines_skipped > 0:
        stats_table.add_row(
            "⚠ Invalid Lines:", f"[yellow]{stats.invalid_lines_skipped}[/yellow]"
        )
    if stats.records_skipped > 0:
        stats_table.add_row(
            "⚠ Bad Records:", f"[yellow]{stats.records_skipped}[/yellow]"
        )

    stats_table.add_row("", "")  # Spacer

    stats_table.add_row("Runs:", f"[cyan]{stats.runs_resolved}[/cyan]")
    stats_table.add_row("FASTQ Files:", f"[cyan]{stats.reads_resolved}[/cyan]")
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_bytes)}[/cyan]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    border_color = "yellow" if stats.accessions_failed else "green"
    console.print()
    console.print(
        Panel(
            stats_table,
            title="[bold]ENA Fetch Summary[/bold]",
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
