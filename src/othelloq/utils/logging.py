"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Optional, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
    MofNCompleteColumn,
)
from rich.panel import Panel


console = Console()


@dataclass
class ProgressMetrics:
    """Running statistics after a number of simulated games."""

    iteration: int
    player_win_rate: float
    player_avg_score: float
    opponent_win_rate: float
    opponent_avg_score: float
    draw_rate: float
    q_table_size: int
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()


class Logger:
    """
    Simulation logger with rich output and JSON logging.

    Args:
        log_dir: Directory for log files (None disables the JSON log)
        verbose: Whether to print to console
    """

    def __init__(self, log_dir: Optional[str] = "runs", verbose: bool = True):
        self.verbose = verbose
        self.log_file: Optional[Path] = None

        if log_dir is not None:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = self.log_dir / f"simulate_{timestamp}.jsonl"

        self.metrics_history: list[ProgressMetrics] = []

    def log_progress(self, metrics: ProgressMetrics) -> None:
        """Log running statistics."""
        self.metrics_history.append(metrics)

        if self.log_file is not None:
            with open(self.log_file, "a") as f:
                f.write(json.dumps(asdict(metrics)) + "\n")

        if self.verbose:
            self._print_progress(metrics)

    def _print_progress(self, m: ProgressMetrics) -> None:
        """Print progress summary to console."""
        table = Table(title=f"Game {m.iteration}", show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Player Win%", f"{m.player_win_rate*100:.1f}%")
        table.add_row("Player Avg Score", f"{m.player_avg_score:.2f}")
        table.add_row("Opponent Win%", f"{m.opponent_win_rate*100:.1f}%")
        table.add_row("Opponent Avg Score", f"{m.opponent_avg_score:.2f}")
        table.add_row("Draw%", f"{m.draw_rate*100:.1f}%")
        table.add_row("Q-table Size", str(m.q_table_size))

        console.print(table)
        console.print()

    def log_message(self, message: str, style: str = "white") -> None:
        """Log a message."""
        if self.verbose:
            console.print(f"[{style}]{escape(message)}[/]")

    def log_info(self, message: str) -> None:
        """Log info message."""
        self.log_message(message, "blue")

    def log_success(self, message: str) -> None:
        """Log success message."""
        self.log_message(message, "green")

    def log_error(self, message: str) -> None:
        """Log error message."""
        self.log_message(message, "red")


def create_progress() -> Progress:
    """Create a rich progress bar with elapsed/remaining time."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        transient=False,
    )


def print_config(config: Any) -> None:
    """Print configuration in a nice format."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)


def print_board(board_str: str, title: str = "Board") -> None:
    """Print a game board in a panel."""
    console.print(Panel(board_str, title=title, border_style="blue"))
