"""HIIT Flow CLI -- an interval timer for structured workouts."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from hiitflow import config as cfg
from hiitflow import display, timer
from hiitflow.cues import CueNotifier
from hiitflow.engine import TimerEngine
from hiitflow.errors import ValidationError
from hiitflow.models import TimerState, WorkoutConfig
from hiitflow.presence import make_presence
from hiitflow.validation import validate

app = typer.Typer(
    name="hiitflow",
    help="Interval workout timer: prep, work/rest sets, and an optional cooldown.",
    no_args_is_help=True,
)

_CONTROLS: dict[str, str] = {
    "r": "resume",
    "s": "skip",
    "n": "restart",
    "q": "quit",
}

# Shared option declarations for commands that take a workout
_PresetOpt = typer.Option(None, "--preset", "-p", help="Start from a saved or built-in preset")
_PrepOpt = typer.Option(None, "--prep", help="Prep time in seconds")
_SetsOpt = typer.Option(None, "--sets", "-s", help="Number of work/rest sets")
_WorkOpt = typer.Option(None, "--work", "-w", help="Work time in seconds")
_RestOpt = typer.Option(None, "--rest", "-r", help="Rest time in seconds")
_CooldownOpt = typer.Option(None, "--cooldown", "-c", help="Cooldown in seconds (0 for none)")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Interval workout timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=display.console, show_path=False)],
        force=True,
    )


def _resolve_workout(
    preset: Optional[str],
    prep: Optional[int],
    sets: Optional[int],
    work: Optional[int],
    rest: Optional[int],
    cooldown: Optional[int],
) -> WorkoutConfig:
    """Build a validated workout from a preset and/or explicit options."""
    candidate: dict[str, Optional[int]] = dict(cfg.DEFAULT_WORKOUT)
    if preset is not None:
        found = cfg.get_preset(preset)
        if found is None:
            display.print_warning(f"Preset '{preset}' not found.")
            raise typer.Exit(1)
        candidate = dict(found.model_dump())

    overrides = {"prep": prep, "sets": sets, "work": work, "rest": rest, "cooldown": cooldown}
    for key, value in overrides.items():
        if value is not None:
            candidate[key] = value

    try:
        return validate(candidate)
    except ValidationError as exc:
        display.print_error(exc.message)
        raise typer.Exit(1)


def _ask_control(state: TimerState) -> str:
    """Show the paused workout and ask what to do next."""
    display.print_state(state)
    while True:
        raw = typer.prompt("[r]esume, [s]kip, [n]ew start, [q]uit", default="r")
        choice = raw.strip().lower()[:1]
        if choice in _CONTROLS:
            return _CONTROLS[choice]
        display.print_warning("  Please enter r, s, n, or q.")


# ---------------------------------------------------------------------------
# Workout
# ---------------------------------------------------------------------------


@app.command()
def start(
    preset: Optional[str] = _PresetOpt,
    prep: Optional[int] = _PrepOpt,
    sets: Optional[int] = _SetsOpt,
    work: Optional[int] = _WorkOpt,
    rest: Optional[int] = _RestOpt,
    cooldown: Optional[int] = _CooldownOpt,
    paused: bool = typer.Option(False, "--paused", help="Start paused and wait for resume"),
    no_sound: bool = typer.Option(False, "--no-sound", help="Silence the phase cues"),
    no_keep_awake: bool = typer.Option(
        False, "--no-keep-awake", help="Let the display sleep during the workout"
    ),
) -> None:
    """Run a workout. Press Ctrl-C to pause, skip, or restart."""
    workout = _resolve_workout(preset, prep, sets, work, rest, cooldown)
    settings = cfg.load_config()

    presence = make_presence(settings.keep_awake and not no_keep_awake)
    notifier = CueNotifier(sound=settings.sound and not no_sound)
    engine = TimerEngine(notifier=notifier, presence=presence)

    display.print_plan(workout)
    engine.start(workout, paused=paused)

    try:
        while True:
            if engine.state.is_running:
                timer.run_workout(engine, presence)

            state = engine.state
            if state.is_complete:
                display.print_success("Workout complete!")
                if typer.confirm("Run it again?", default=False):
                    engine.restart()
                    continue
                break

            action = _ask_control(state)
            if action == "resume":
                engine.resume()
            elif action == "skip":
                engine.skip()
            elif action == "restart":
                engine.restart()
            else:
                display.print_info("Workout stopped.")
                break
    finally:
        engine.discard()


@app.command()
def plan(
    preset: Optional[str] = _PresetOpt,
    prep: Optional[int] = _PrepOpt,
    sets: Optional[int] = _SetsOpt,
    work: Optional[int] = _WorkOpt,
    rest: Optional[int] = _RestOpt,
    cooldown: Optional[int] = _CooldownOpt,
) -> None:
    """Show every phase of a workout and how long it takes."""
    workout = _resolve_workout(preset, prep, sets, work, rest, cooldown)
    display.print_plan(workout)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


@app.command()
def presets() -> None:
    """List built-in and saved presets."""
    display.print_presets(cfg.list_presets())


@app.command(name="save-preset")
def save_preset(
    name: str = typer.Argument(..., help="Name to save the workout under"),
    preset: Optional[str] = _PresetOpt,
    prep: Optional[int] = _PrepOpt,
    sets: Optional[int] = _SetsOpt,
    work: Optional[int] = _WorkOpt,
    rest: Optional[int] = _RestOpt,
    cooldown: Optional[int] = _CooldownOpt,
) -> None:
    """Save a workout as a named preset."""
    workout = _resolve_workout(preset, prep, sets, work, rest, cooldown)
    try:
        cfg.save_preset(name, workout)
    except ValueError as exc:
        display.print_warning(str(exc))
        raise typer.Exit(1)
    display.print_success(f"Saved preset '{name.strip().lower()}'.")


@app.command(name="delete-preset")
def delete_preset(
    name: str = typer.Argument(..., help="Preset to delete"),
) -> None:
    """Delete a saved preset."""
    if not cfg.delete_preset(name):
        display.print_warning(f"No saved preset named '{name}'.")
        raise typer.Exit(1)
    display.print_success(f"Deleted preset '{name}'.")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@app.command()
def config(
    sound: Optional[bool] = typer.Option(
        None, "--sound/--no-sound", help="Ring cues on phase changes"
    ),
    keep_awake: Optional[bool] = typer.Option(
        None, "--keep-awake/--no-keep-awake", help="Keep the display awake while running"
    ),
    show: bool = typer.Option(False, "--show", help="Show current config"),
) -> None:
    """Configure sound and display-wake behaviour."""
    if sound is not None or keep_awake is not None:
        result = cfg.set_options(sound=sound, keep_awake=keep_awake)
        display.print_success(
            f"Sound: {'on' if result.sound else 'off'}, "
            f"keep awake: {'on' if result.keep_awake else 'off'}"
        )
    elif show:
        current = cfg.load_config()
        display.print_info(f"Sound: {'on' if current.sound else 'off'}")
        display.print_info(f"Keep awake: {'on' if current.keep_awake else 'off'}")
        display.print_info(f"Saved presets: {len(current.presets)}")
    else:
        display.print_info("Use --sound/--no-sound, --keep-awake/--no-keep-awake, or --show.")
