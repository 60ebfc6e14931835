"""Typer entry-point wiring for the Colonnade CLI."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table

from .. import actions
from ..cards import card_from_code
from ..engine import GameSession
from ..messages import Event, phase_prompt
from ..state import GUARDED_SLOT, GameConfig, GameState, check_capacity, check_conservation
from .render import describe_event, render_state

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

HELP_TEXT = """\
[bold]Commands[/bold] (cards are codes such as [cyan]7H[/cyan], [cyan]10S[/cyan], [cyan]JOKER-R[/cyan])
  reserve CARD | hand CARD | start          setup
  discard \\[CARD] | draw | shuffle         turn start
  select CARD                               toggle a card in the selection
  place SUIT POS                            play the selection (POS 0 opens, {guard} guards)
  seven CARD | exchange SUIT CARD           guard a column with a seven or Joker
  joker CARD heal|attack                    Joker effect (Queen combo when a Queen is selected)
  challenge yes|no                          answer a Queen challenge
  swap HAND_CARD RESERVE_CARD               exchange hand and reserve cards
  revolution | skip | end | surrender       actions and turn control
  help | quit
""".format(guard=GUARDED_SLOT)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def _root(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for engine diagnostics."),
) -> None:
    """Colonnade: a solo column-building card game."""

    _configure_logging(log_level)


def parse_command(line: str, state: GameState) -> actions.Command:
    """Translate one line of player input into an engine command.

    Raises ``ValueError`` for input that does not name a command.
    """

    words = line.split()
    if not words:
        raise ValueError("empty command")
    verb, args = words[0].lower(), words[1:]

    def _arity(count: int) -> None:
        if len(args) != count:
            raise ValueError(f"'{verb}' expects {count} argument(s)")

    if verb == "select":
        _arity(1)
        return actions.SelectCard(card_from_code(args[0]))
    if verb == "reserve":
        _arity(1)
        return actions.MoveToReserve(card_from_code(args[0]))
    if verb == "hand":
        _arity(1)
        return actions.MoveToHand(card_from_code(args[0]))
    if verb == "start":
        return actions.StartGame()
    if verb == "discard":
        return actions.Discard(card_from_code(args[0]) if args else None)
    if verb == "draw":
        return actions.DrawCards()
    if verb == "swap":
        _arity(2)
        return actions.ExchangeCards(card_from_code(args[0]), card_from_code(args[1]))
    if verb == "place":
        _arity(2)
        return actions.PlaceCard(args[0].lower(), int(args[1]))
    if verb == "seven":
        _arity(1)
        return actions.SevenAction(card_from_code(args[0]))
    if verb == "exchange":
        _arity(2)
        column = state.column(args[0].lower())
        if column.reserve_suit is None:
            raise ValueError(f"the {column.suit.value} column has no guard to exchange")
        return actions.ActivatorExchange(column.suit, column.reserve_suit, card_from_code(args[1]))
    if verb == "joker":
        _arity(2)
        return actions.JokerAction(card_from_code(args[0]), args[1].lower())
    if verb == "challenge":
        _arity(1)
        return actions.QueenChallengeAnswer(args[0].lower() in ("yes", "y", "true", "1"))
    if verb == "shuffle":
        return actions.StrategicShuffle()
    if verb == "revolution":
        return actions.Revolution()
    if verb == "skip":
        return actions.SkipAction()
    if verb in ("end", "pass"):
        return actions.PassTurn()
    if verb == "surrender":
        return actions.Surrender()
    raise ValueError(f"unknown command '{verb}'")


def _print_event(event: Event) -> None:
    text = describe_event(event)
    if not text:
        return
    style = "green" if event.accepted else "red"
    console.print(f"[{style}]{text}[/{style}]")


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    name: str | None = typer.Option(None, help="Player name shown on the board."),
) -> None:
    """Play an interactive game in the terminal."""

    config = GameConfig(seed=seed)
    if name:
        config.player_name = name
    session = GameSession(config)
    session.subscribe(lambda _state, event: _print_event(event))
    session.initialize_game()

    while True:
        state = session.state
        console.print(render_state(state))
        prompt = phase_prompt(state)
        if prompt is not None:
            _print_event(Event.ok(prompt))
        if state.is_game_over:
            break
        try:
            line = Prompt.ask("[bold]>[/bold]", console=console)
        except (EOFError, KeyboardInterrupt):
            break
        verb = line.strip().lower()
        if verb in ("quit", "exit"):
            break
        if verb in ("help", "?"):
            console.print(HELP_TEXT)
            continue
        try:
            command = parse_command(line, state)
        except (ValueError, KeyError) as exc:
            console.print(f"[red]{exc}[/red]")
            continue
        session.dispatch(command)


@dataclass(slots=True)
class SimulationReport:
    """Outcome of one random-walk game."""

    game: int
    turns: int = 0
    commands: int = 0
    open_columns: int = 0
    health: int = 0
    violations: list[str] = field(default_factory=list)


def simulate_game(game: int, steps: int, seed: int) -> SimulationReport:
    """Drive one game with uniformly random legal commands, auditing each state."""

    session = GameSession(GameConfig(seed=seed))
    chooser = random.Random(seed ^ 0x5EED)
    session.initialize_game()
    report = SimulationReport(game=game)

    for _ in range(steps):
        legal = session.legal_commands()
        if not legal:
            break
        session.dispatch(chooser.choice(legal))
        report.commands += 1
        problems = check_conservation(session.state) + check_capacity(session.state)
        if problems:
            report.violations.extend(problems)
            break

    state = session.state
    report.turns = state.turn
    report.open_columns = sum(1 for column in state.columns.values() if column.is_open)
    report.health = state.current_player.health
    return report


@app.command()
def simulate(
    games: int = typer.Option(5, min=1, help="Number of games to play."),
    steps: int = typer.Option(200, min=1, help="Maximum commands per game."),
    seed: int = typer.Option(123, help="Base random seed; game N uses seed + N."),
) -> None:
    """Play random legal commands and check card conservation and capacity."""

    reports = [simulate_game(idx, steps, seed + idx) for idx in range(games)]

    table = Table(title="Random Play Audit", box=box.SIMPLE_HEAVY)
    table.add_column("Game", justify="center")
    table.add_column("Turns", justify="right")
    table.add_column("Commands", justify="right")
    table.add_column("Open", justify="right")
    table.add_column("Health", justify="right")
    table.add_column("Violations", justify="left")

    for report in reports:
        violations = "[green]none[/green]" if not report.violations else f"[red]{report.violations[0]}[/red]"
        table.add_row(
            str(report.game),
            str(report.turns),
            str(report.commands),
            str(report.open_columns),
            str(report.health),
            violations,
        )

    console.print(table)

    if any(report.violations for report in reports):
        raise typer.Exit(code=1)
    console.print(f"[cyan]{len(reports)} game(s) simulated without violations.[/cyan]")


def main() -> None:
    """Entry-point for ``python -m colonnade.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
