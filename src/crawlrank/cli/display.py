# src/crawlrank/cli/display.py

"""Display and formatting utilities for CLI output."""

import textwrap

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from crawlrank.search import SearchResponse


def _wrap_line(line: str, width: int) -> list[str]:
    """Wraps a single line and pads every segment to width.

    Args:
        line: The line to wrap.
        width: The target width.

    Returns:
        Wrapped segments, each exactly width characters long unless a segment
        already is.
    """
    if not line.strip():
        return [" " * width]
    segments = textwrap.wrap(
        line,
        width=width,
        replace_whitespace=True,
        drop_whitespace=True,
        break_long_words=True,
        break_on_hyphens=True,
    )
    return [segment.ljust(width) for segment in segments]


def _format_text_for_panel(text_content: str | None, width: int = 80) -> str:
    """Wraps text and pads lines to ensure fixed content width for a Panel.

    Paragraphs (separated by a blank line) are kept apart by one padded blank
    line.

    Args:
        text_content: The text to format.
        width: The target width for wrapped text.

    Returns:
        Formatted text with proper line wrapping and padding.
    """
    if not text_content:
        return " " * width

    output_lines: list[str] = []
    paragraphs = text_content.split("\n\n")
    for i, paragraph in enumerate(paragraphs):
        for line in paragraph.splitlines() or [""]:
            output_lines.extend(_wrap_line(line, width))
        if i < len(paragraphs) - 1:
            output_lines.append(" " * width)

    return "\n".join(output_lines)


def display_search_results(
    response: SearchResponse,
    display_limit: int = 10,
    console: Console | None = None,
) -> None:
    """Displays search results with a snippet Panel per item.

    Args:
        response: The search response containing results to display.
        display_limit: Maximum number of results to show.
        console: Console to print to. A new one is created if omitted.
    """
    console = console or Console()
    console.print(
        Panel(
            f"[bold cyan]Search Query:[/bold cyan] {response.query}\n"
            f"[bold cyan]Strategy:[/bold cyan] {response.strategy.value}",
            expand=False,
            border_style="dim",
        )
    )

    num_results_to_show = min(len(response.results), display_limit)
    time_info = (
        f"Time: {response.processing_time_ms}ms"
        if response.processing_time_ms is not None
        else ""
    )
    console.print(
        f"Showing {num_results_to_show} of {response.count} results. {time_info}"
    )

    if not response.results:
        console.print("[yellow]No results found.[/yellow]")
        return

    console.print("")

    for i, item in enumerate(response.results[:num_results_to_show]):
        console.rule(f"[bold]Result {i + 1}[/bold]", style="dim")
        console.print(f"[bold cyan]URL:[/bold cyan] [link={item.url}]{item.url}[/link]")
        if item.title:
            console.print(f"[bold cyan]Title:[/bold cyan] {item.title}")
        console.print(f"[bold cyan]Score:[/bold cyan] [green]{item.score:.4f}[/green]")
        if item.pagerank is not None:
            console.print(f"[bold cyan]PageRank:[/bold cyan] {item.pagerank:.6f}")

        if item.snippet:
            console.print(
                Panel(
                    _format_text_for_panel(item.snippet),
                    title="[bold blue]Snippet[/bold blue]",
                    border_style="blue",
                    expand=False,
                    padding=(0, 1),
                )
            )

        if i < num_results_to_show - 1:
            console.print("")

    console.rule(style="dim")
    if len(response.results) > num_results_to_show:
        console.print(
            f"...and {len(response.results) - num_results_to_show} more results "
            "not shown due to limit."
        )


def display_page_ranks(
    page_ranks: dict[str, float],
    inbound_counts: dict[str, int] | None = None,
    display_limit: int | None = None,
    console: Console | None = None,
) -> None:
    """Displays PageRank values as a table, highest rank first.

    Args:
        page_ranks: PageRank per URL.
        inbound_counts: Optional number of inbound links per URL.
        display_limit: Maximum number of rows; None shows every page.
        console: Console to print to. A new one is created if omitted.
    """
    console = console or Console()
    if not page_ranks:
        console.print("[yellow]No pages ranked.[/yellow]")
        return

    ordered = sorted(page_ranks.items(), key=lambda item: (-item[1], item[0]))
    if display_limit is not None:
        ordered = ordered[:display_limit]

    table = Table(title=f"PageRank ({len(page_ranks)} pages)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("URL", style="cyan", overflow="fold")
    table.add_column("PageRank", justify="right", style="green")
    if inbound_counts is not None:
        table.add_column("Inbound", justify="right")

    for position, (url, rank) in enumerate(ordered, start=1):
        row = [str(position), url, f"{rank:.6f}"]
        if inbound_counts is not None:
            row.append(str(inbound_counts.get(url, 0)))
        table.add_row(*row)

    console.print(table)
