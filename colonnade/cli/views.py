"""Composable view primitives for the Colonnade CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..state import GUARDED_SLOT, Column, GameState


@dataclass(slots=True)
class StateSummaryView:
    """Renderable summarising the board, the player's cards and the turn."""

    state: GameState
    card_formatter: Callable[[Card], str]

    def _cards_markup(self, cards: Sequence[Card]) -> str:
        if not cards:
            return "—"
        return " ".join(self.card_formatter(card) for card in cards)

    def _column_status(self, column: Column) -> str:
        if column.is_locked:
            return "[bold green]Complete[/bold green]"
        if column.is_open:
            return "Open"
        return "[dim]Closed[/dim]"

    def _board_table(self) -> Table:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Column", justify="left", style="bold")
        table.add_column("Run", justify="left")
        table.add_column(f"Guard ({GUARDED_SLOT})", justify="left")
        table.add_column("Court", justify="left")
        table.add_column("Status", justify="left")

        for suit, column in self.state.columns.items():
            guard = "—"
            if column.reserve_suit is not None:
                guard = self.card_formatter(column.reserve_suit)
            elif column.is_reserve_blocked:
                guard = "[dim]blocked[/dim]"
            table.add_row(
                suit.value.title(),
                self._cards_markup(column.cards),
                guard,
                self._cards_markup(list(column.face_cards.values())),
                self._column_status(column),
            )
        return table

    def _player_panel(self) -> Panel:
        player = self.state.current_player
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Hand[/cyan]: {self._cards_markup(player.hand)}")
        grid.add_row(f"[cyan]Reserve[/cyan]: {self._cards_markup(player.reserve)}")
        if self.state.selected_cards:
            grid.add_row(f"[cyan]Selected[/cyan]: {self._cards_markup(self.state.selected_cards)}")
        title = player.profile.name
        if player.profile.epithet:
            title = f"{title}, {player.profile.epithet}"
        return Panel(grid, title=title, box=box.SQUARE, border_style="green")

    def _metadata_panel(self) -> Panel:
        state = self.state
        player = state.current_player
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Turn[/cyan]: {state.turn}")
        grid.add_row(f"[cyan]Phase[/cyan]: {state.phase.value.title()}")
        grid.add_row(f"[cyan]Health[/cyan]: {player.health}/{player.max_health}")
        grid.add_row(f"[cyan]Deck[/cyan]: {len(state.draw_pile)} card(s)")
        if player.discard_pile:
            top_card = self.card_formatter(player.discard_pile[-1])
            grid.add_row(f"[cyan]Discard[/cyan]: {top_card} ({len(player.discard_pile)} card(s))")
        else:
            grid.add_row("[cyan]Discard[/cyan]: —")
        if state.queen_challenge.is_active:
            grid.add_row("[bold magenta]Queen challenge pending[/bold magenta]")
        if state.is_game_over:
            grid.add_row(f"[bold red]Game over[/bold red] (winner: {state.winner})")
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        return Group(self._board_table(), self._player_panel(), self._metadata_panel())
