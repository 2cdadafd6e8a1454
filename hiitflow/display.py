"""Rich terminal formatting helpers."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich.text import Text

from hiitflow import sequencer
from hiitflow.models import Phase, TimerState, WorkoutConfig

console = Console()

_PHASE_LABEL: dict[Phase, str] = {
    Phase.PREP: "Prep",
    Phase.WORK: "Work",
    Phase.REST: "Rest",
    Phase.COOLDOWN: "Cooldown",
    Phase.COMPLETE: "Complete!",
}

_PHASE_STYLE: dict[Phase, str] = {
    Phase.PREP: "bold cyan",
    Phase.WORK: "bold red",
    Phase.REST: "bold green",
    Phase.COOLDOWN: "bold cyan",
    Phase.COMPLETE: "bold green",
}


def format_time(seconds: int) -> str:
    """``65`` → ``"1:05"``, ``45`` → ``"45s"``."""
    mins, secs = divmod(seconds, 60)
    if mins > 0:
        return f"{mins}:{secs:02d}"
    return f"{secs}s"


def phase_label(phase: Phase) -> str:
    return _PHASE_LABEL[phase]


def phase_style(phase: Phase) -> str:
    return _PHASE_STYLE[phase]


def next_label(state: TimerState) -> Optional[str]:
    """What comes after the current phase, e.g. ``"Rest (10s)"``."""
    segment = sequencer.upcoming(state)
    if segment is None:
        return None
    return f"{phase_label(segment.phase)} ({format_time(segment.duration)})"


def describe(state: TimerState) -> str:
    """One-line description used as the progress bar label."""
    label = phase_label(state.phase)
    if state.is_complete:
        return label
    text = f"{label}  set {state.current_set}/{state.config.sets}"
    if state.is_paused:
        text += "  (paused)"
    return text


def print_phase_banner(phase: Phase, current_set: int, total_sets: int) -> None:
    """Announce a phase in a styled panel."""
    style = phase_style(phase)
    body = Text(phase_label(phase), justify="center", style=style)
    if phase != Phase.COMPLETE:
        body.append(f"\nSet {current_set} of {total_sets}", style="dim")
    console.print(Panel(body, border_style=style.replace("bold ", ""), padding=(0, 4)))


def print_state(state: TimerState) -> None:
    """Print where the workout currently stands."""
    lines: list[str] = [
        f"Phase: {phase_label(state.phase)}",
        f"Time left: {format_time(state.time_remaining)} of {format_time(state.total_time)}",
    ]
    if not state.is_complete:
        lines.append(f"Set: {state.current_set} of {state.config.sets}")
        upcoming = next_label(state)
        if upcoming:
            lines.append(f"Next: {upcoming}")
    title = "Paused" if state.is_paused and not state.is_complete else "Workout"
    console.print(Panel("\n".join(lines), title=title, border_style=phase_style(state.phase)))


def print_plan(config: WorkoutConfig, title: str = "Workout plan") -> None:
    """Print every segment of a workout and its total length."""
    table = Table(box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("phase")
    table.add_column("set", justify="right")
    table.add_column("time", justify="right")

    for index, segment in enumerate(sequencer.plan(config), 1):
        table.add_row(
            str(index),
            phase_label(segment.phase),
            str(segment.set_number),
            format_time(segment.duration),
            style=phase_style(segment.phase).replace("bold ", ""),
        )

    total = format_time(sequencer.total_duration(config))
    console.print(Panel(table, title=title, subtitle=f"Total {total}", border_style="blue"))


def print_presets(presets: dict[str, WorkoutConfig]) -> None:
    """Print saved workouts as a table."""
    if not presets:
        console.print(Panel("No presets.", title="Presets", border_style="dim"))
        return

    table = Table(show_header=True, box=None, pad_edge=False)
    for column in ("name", "prep", "sets", "work", "rest", "cooldown", "total"):
        table.add_column(column)

    for name, config in sorted(presets.items()):
        table.add_row(
            name,
            format_time(config.prep),
            str(config.sets),
            format_time(config.work),
            format_time(config.rest),
            format_time(config.cooldown) if config.cooldown else "-",
            format_time(sequencer.total_duration(config)),
        )

    console.print(Panel(table, title="Presets", border_style="blue"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]{message}[/bold red]")


def create_workout_progress() -> Progress:
    """Create a Rich progress bar for the current phase."""
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        TextColumn("{task.fields[clock]:>6}"),
        TextColumn("[dim]{task.fields[next]}"),
        console=console,
    )
