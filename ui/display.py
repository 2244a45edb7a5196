"""
Rich-based terminal display for the measurement core.

:class:`ConsoleDisplay` implements ``netprobe.DisplayAdapter``.  It keeps
track of which view the user asked for and only shows pushes for that
view, so a hold switches the terminal to the live log and a tap switches
it back to the averages.  Inside a ``with`` block the focused view is
redrawn in place.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from rich import box
from rich.console import Console, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from netprobe.activity_log import LogEntry
from netprobe.constants import MODERATE_SPEED_KBPS, SLOW_SPEED_KBPS, TIMESTAMP_FORMAT
from netprobe.display import View

console = Console()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_kbps(kbps: float) -> str:
    """Human-readable speed string."""
    if kbps >= 1024:
        return f"{kbps / 1024:.2f} MB/s"
    return f"{kbps:.2f} KB/s"


def speed_color(kbps: float) -> str:
    """Rich colour for a speed: red when slow, yellow when moderate."""
    if kbps < SLOW_SPEED_KBPS:
        return "red"
    if kbps < MODERATE_SPEED_KBPS:
        return "yellow"
    return "green"


# ---------------------------------------------------------------------------
# Display adapter
# ---------------------------------------------------------------------------

class ConsoleDisplay:
    """Shows averages or the activity log, whichever view is focused.

    Used as a context manager the display owns a :class:`rich.live.Live`
    region and redraws it in place.  Outside one, each push is printed.
    """

    def __init__(self, out: Optional[Console] = None, view: View = View.AVERAGES) -> None:
        self.console = out or console
        self.view = view
        self.averages: Tuple[float, float] = (0.0, 0.0)
        self.entries: Tuple[LogEntry, ...] = ()
        self.live: Optional[Live] = None

    def __enter__(self) -> ConsoleDisplay:
        self.live = Live(self.render(), console=self.console, auto_refresh=False)
        self.live.start(refresh=True)
        return self

    def __exit__(self, *exc: object) -> None:
        if self.live is not None:
            self.live.stop()
            self.live = None

    def focus(self, view: View) -> None:
        if view is self.view:
            return
        self.view = view
        if self.live is not None:
            self._show(self.render())
            return
        label = "Live Log" if view is View.LOG else "Average Speeds"
        self.console.rule(f"[bold cyan]{label}[/bold cyan]")
        if view is View.AVERAGES:
            self._show(self._averages_panel())

    def show_averages(self, download_kbps: float, upload_kbps: float) -> None:
        self.averages = (download_kbps, upload_kbps)
        if self.view is View.AVERAGES:
            self._show(self._averages_panel())

    def show_log(self, entries: Sequence[LogEntry]) -> None:
        self.entries = tuple(entries)
        if self.view is View.LOG:
            self._show(self._log_table())

    # -- Rendering ----------------------------------------------------------

    def render(self) -> RenderableType:
        """Renderable for the focused view."""
        if self.view is View.LOG:
            return self._log_table()
        return self._averages_panel()

    def _show(self, renderable: RenderableType) -> None:
        if self.live is not None:
            self.live.update(renderable, refresh=True)
        else:
            self.console.print(renderable)

    def _averages_panel(self) -> Panel:
        dl, ul = self.averages
        dl_color, ul_color = speed_color(dl), speed_color(ul)
        return Panel.fit(
            f"[bold white]Download:[/bold white]  [bold {dl_color}]{format_kbps(dl)}[/bold {dl_color}]\n"
            f"[bold white]Upload:[/bold white]    [bold {ul_color}]{format_kbps(ul)}[/bold {ul_color}]",
            title="[bold]Average Speed[/bold]",
            border_style="cyan",
        )

    def _log_table(self) -> RenderableType:
        if not self.entries:
            return Text.from_markup("[dim]No transfers logged yet[/dim]")

        table = Table(title="Network Activity", box=box.ROUNDED)
        table.add_column("Time", style="dim")
        table.add_column("Direction", style="bold")
        table.add_column("URL")
        table.add_column("Status", justify="right")
        table.add_column("Speed", justify="right")
        table.add_column("Raw Data", overflow="ellipsis", max_width=40)

        for entry in self.entries:
            color = speed_color(entry.kbps)
            table.add_row(
                entry.timestamp.strftime(TIMESTAMP_FORMAT),
                entry.direction.value,
                entry.url,
                str(entry.status),
                f"[{color}]{format_kbps(entry.kbps)}[/{color}]",
                entry.preview,
            )

        return table
