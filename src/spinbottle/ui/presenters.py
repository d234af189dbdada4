from __future__ import annotations

from collections.abc import Callable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core import feature_flags
from ..core.errors import RoundExhaustedError
from ..core.interfaces import Command, Presenter
from ..dynamic.ring import RingLayout
from ..dynamic.selection import CommitOutcome, SelectionState, SpinResult

_GRID_WIDTH = 41
_GRID_HEIGHT = 17
# indexed by ring angle in 45° steps: left, then clockwise
_ARROWS = ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙")


def _arrow_for(angle: float) -> str:
    octant = round(angle / 45.0) % 8
    return _ARROWS[octant]


def render_ring(layout: RingLayout, state: SelectionState, *, pointer_angle: float | None = None) -> Text:
    """Draw the ring as text: one label per slot, an arrow in the middle."""

    cells: list[list[tuple[str, str]]] = [[(" ", "")] * _GRID_WIDTH for _ in range(_GRID_HEIGHT)]
    cx, cy = _GRID_WIDTH // 2, _GRID_HEIGHT // 2
    x_scale = (cx - 3) / layout.radius
    y_scale = (cy - 1) / layout.radius
    completed = set(state.completed_ids)

    for slot in layout:
        label = f"P{slot.id}"
        if slot.id == state.selected_id:
            style = "bold green"
        elif slot.id in completed:
            style = "dim"
        else:
            style = "bold cyan"
        row = cy + round(slot.offset.y * y_scale)
        start = cx + round(slot.offset.x * x_scale) - len(label) // 2
        for i, char in enumerate(label):
            col = start + i
            if 0 <= row < _GRID_HEIGHT and 0 <= col < _GRID_WIDTH:
                cells[row][col] = (char, style)

    if pointer_angle is None:
        pointer_angle = 0.0
        if state.selected_id is not None:
            pointer_angle = layout.slot_for(state.selected_id).angle
    cells[cy][cx] = (_arrow_for(pointer_angle), "bold yellow")

    text = Text()
    for r, line in enumerate(cells):
        for char, style in line:
            text.append(char, style=style or None)
        if r < _GRID_HEIGHT - 1:
            text.append("\n")
    return text


class RichPresenter(Presenter):
    def __init__(
        self,
        *,
        no_color: bool = False,
        input_fn: Callable[[str], str] = input,
        console: Console | None = None,
    ):
        if console is not None:
            self.console = console
        elif no_color:
            self.console = Console(force_terminal=False, color_system=None)
        else:
            self.console = Console(force_terminal=True, color_system="auto")
        self._input = input_fn

    def start_game(self, layout: RingLayout) -> None:
        guide = (
            f"[bold]{layout.player_count} players[/] sit around the bottle.\n"
            "Each spin picks someone who has not had a turn yet this round.\n\n"
            "[bold]Controls[/]: Enter = spin • r = new round • p N = players • h = help • q = quit"
        )
        self.console.print(Panel(guide, title="Spin the Bottle", border_style="bold cyan", expand=False))

    def show_ring(self, layout: RingLayout, state: SelectionState) -> None:
        taken = len(state.order)
        title = f"Round: {taken}/{layout.player_count} had a turn"
        self.console.print(Panel(render_ring(layout, state), title=title, border_style="magenta", expand=False))
        if feature_flags.is_enabled(feature_flags.SHOW_ANGLES):
            angles = ", ".join(f"P{slot.id} {slot.angle:.0f}°" for slot in layout)
            self.console.print(f"[dim]Angles: {angles}[/]")

    def prompt_command(self, state: SelectionState) -> Command:
        while True:
            try:
                raw = self._input("Command (Enter to spin): ").strip().lower()
            except EOFError:
                return Command("quit")
            if raw in {"", "s", "spin"}:
                return Command("spin")
            if raw in {"q", "quit"}:
                return Command("quit")
            if raw in {"r", "reset"}:
                return Command("reset")
            if raw in {"h", "help", "?"}:
                self._print_help()
                continue
            head, _, tail = raw.partition(" ")
            if head in {"p", "players"} and tail.strip().lstrip("-").isdigit():
                return Command("players", int(tail.strip()))
            self.console.print("[red]Invalid input[/]. Press Enter to spin, or 'h' for help.")

    def show_spin(self, result: SpinResult, rotation: float) -> None:
        self.console.print(f"[dim]Selecting... bottle turns to {rotation:.0f}°[/]")

    def show_commit(self, outcome: CommitOutcome) -> None:
        self.console.print(f"[green]P{outcome.selected_id} has been selected![/]")
        if outcome.round_complete:
            self.console.print("[bold yellow]Everyone has had a turn![/] Press 'r' to start a new round.")
        else:
            self.console.print(f"[dim]{outcome.remaining} still to go this round.[/]")

    def show_error(self, error: Exception) -> None:
        if isinstance(error, RoundExhaustedError):
            self.console.print("[yellow]Round over[/]: everyone has had a turn. Press 'r' to start again.")
            return
        self.console.print(f"[red]{escape(str(error))}[/]")

    def round_reset(self, layout: RingLayout) -> None:
        self.console.print(f"[bold]New round[/] with {layout.player_count} players.")

    def summary(self, rounds: list[list[int]]) -> None:
        if not rounds:
            self.console.print("No complete rounds.")
            return
        table = Table(title="Game Summary", show_header=True, header_style="bold blue", box=box.SIMPLE_HEAVY)
        table.add_column("Round", justify="right", style="cyan", no_wrap=True)
        table.add_column("Turn order")
        for i, order in enumerate(rounds, 1):
            table.add_row(str(i), " → ".join(f"P{player}" for player in order))
        self.console.print()
        self.console.print(table)

    # --- helpers ---
    def _print_help(self) -> None:
        table = Table(show_header=False)
        table.add_row("Spin:", "Enter or s")
        table.add_row("New round:", "r")
        table.add_row("Change players:", "p N (2–12)")
        table.add_row("Help:", "h")
        table.add_row("Quit:", "q")
        self.console.print(Panel.fit(table, title="Controls", style="dim"))
