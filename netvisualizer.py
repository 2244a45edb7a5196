#!/usr/bin/env python3
"""
Network visualizer host -- runs the measurement loop in a terminal.

Usage::

    python netvisualizer.py                          # measure until Ctrl-C
    python netvisualizer.py --cycles 5               # stop after 5 cycles
    python netvisualizer.py --log-view               # show the live log
    python netvisualizer.py --upload-url https://example.com/post
    python netvisualizer.py --timeout 10             # per-transfer timeout
    python netvisualizer.py --save-config            # persist the options

Options not given on the command line come from
``~/.netvisualizer/config.json``.

The view is chosen once at start-up with ``--log-view``.  A terminal has no
pointer, so this host does not classify taps and holds; hosts that do get
pointer input drive ``netprobe.view.ViewController`` with its
``pointer_down``, ``tick`` and ``pointer_up`` calls and hand it the same
display and ``scheduler.snapshot``.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from rich.logging import RichHandler

from netprobe.config import ProbeConfig, config_path, read_config_file, save_config
from netprobe.display import View
from netprobe.exceptions import ConfigError
from netprobe.probe import TransferProbe
from netprobe.scheduler import MeasurementScheduler
from ui.display import ConsoleDisplay, console


# ---------------------------------------------------------------------------
# Config assembly
# ---------------------------------------------------------------------------

def _build_config(args: argparse.Namespace, base: Optional[Dict[str, Any]] = None) -> ProbeConfig:
    """Overlay command-line options on *base* and validate.

    Raises ``ConfigError`` on a bad value.
    """
    values = dict(read_config_file() if base is None else base)
    overrides = {
        "download_url": args.download_url,
        "upload_url": args.upload_url,
        "upload_size": args.upload_size,
        "cycle_pause": args.pause,
        "transfer_timeout": args.timeout,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ProbeConfig.from_dict(values)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

async def run_monitor(
    config: ProbeConfig,
    *,
    max_cycles: Optional[int] = None,
    view: View = View.AVERAGES,
) -> MeasurementScheduler:
    """Measure with a console display until stopped.  Returns the scheduler."""
    with ConsoleDisplay(view=view) as display:
        async with TransferProbe(config) as probe:
            scheduler = MeasurementScheduler(probe, display=display)
            await scheduler.run(max_cycles=max_cycles)

    return scheduler


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Network visualizer -- live download/upload averages and activity log",
    )
    parser.add_argument("--download-url", type=str, metavar="URL", help="URL fetched by the download probe")
    parser.add_argument("--upload-url", type=str, metavar="URL", help="URL the upload probe posts to")
    parser.add_argument("--upload-size", type=int, metavar="BYTES", help="Upload body size in bytes (default: 512000)")
    parser.add_argument("--pause", type=float, metavar="SECS", help="Pause between cycles in seconds (default: 1)")
    parser.add_argument("--timeout", type=float, metavar="SECS", help="Per-transfer timeout (default: none)")
    parser.add_argument("--cycles", type=int, metavar="N", help="Stop after N cycles (default: run forever)")
    parser.add_argument("--log-view", action="store_true", help="Show the activity log instead of averages")
    parser.add_argument("--save-config", action="store_true", help="Save the given options as defaults and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every transfer")

    args = parser.parse_args()
    _setup_logging(args.verbose)

    try:
        config = _build_config(args)
    except ConfigError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        sys.exit(1)

    if args.cycles is not None and args.cycles < 1:
        console.print("[red]Error: --cycles must be >= 1[/red]")
        sys.exit(1)

    if args.save_config:
        path = save_config(config)
        console.print(f"[green]Config saved to:[/green] {path}")
        return

    console.print(f"[dim]Config: {config_path()}[/dim]")

    try:
        asyncio.run(
            run_monitor(
                config,
                max_cycles=args.cycles,
                view=View.LOG if args.log_view else View.AVERAGES,
            )
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Measurement stopped by user[/yellow]")


if __name__ == "__main__":
    main()
