"""
observers.py - Event hooks for the board and the search

The Board and MinimaxPlayer report what they do through these observer
interfaces instead of logging directly, which keeps the evaluator and the
recursion free of side effects. DebugObserver is the default and forwards
every event to the shared debug manager.
"""

from typing import List, Optional, Tuple

from connect_four.debug import debug, DebugLevel
from connect_four.utils import Player


class GameObserver:
    """Receives board mutations. All hooks are no-ops by default."""

    def on_move(self, row: int, column: int, player: Player) -> None:
        pass

    def on_rejected_move(self, column: int, player: Player, reason: str) -> None:
        pass

    def on_undo(self, row: int, column: int, player: Player) -> None:
        pass

    def on_win(self, player: Player, row: int, column: int) -> None:
        pass

    def on_draw(self) -> None:
        pass


class SearchObserver:
    """Receives search progress. All hooks are no-ops by default."""

    def on_search_start(self, depth: int) -> None:
        pass

    def on_node(self, depth: int, maximizing: bool, score: float,
                column: Optional[int]) -> None:
        pass

    def on_best_move(self, column: Optional[int], score: float, nodes: int) -> None:
        pass


class NullObserver(GameObserver, SearchObserver):
    """Observer that ignores everything."""


class DebugObserver(GameObserver, SearchObserver):
    """Forwards events to the debug manager under the given components."""

    def __init__(self, board_component: str = "board", search_component: str = "search"):
        self.board_component = board_component
        self.search_component = search_component

    def on_move(self, row, column, player):
        if debug.is_enabled_for(DebugLevel.TRACE, self.board_component):
            debug.trace(f"Player {player.name} placed a piece at ({row}, {column})",
                        self.board_component)

    def on_rejected_move(self, column, player, reason):
        if debug.is_enabled_for(DebugLevel.DEBUG, self.board_component):
            # player may be any value here, not only a Player
            name = getattr(player, 'name', repr(player))
            debug.debug(f"Rejected move in column {column} for player {name}: {reason}",
                        self.board_component)

    def on_undo(self, row, column, player):
        if debug.is_enabled_for(DebugLevel.TRACE, self.board_component):
            debug.trace(f"Removed {player.name} piece at ({row}, {column})",
                        self.board_component)

    def on_win(self, player, row, column):
        if debug.is_enabled_for(DebugLevel.TRACE, self.board_component):
            debug.trace(f"Winning move by {player.name} at column {column}, row {row}",
                        self.board_component)

    def on_draw(self):
        if debug.is_enabled_for(DebugLevel.TRACE, self.board_component):
            debug.trace("Board filled without a winner", self.board_component)

    def on_search_start(self, depth):
        debug.debug(f"Searching to depth {depth}", self.search_component)

    def on_node(self, depth, maximizing, score, column):
        if debug.is_enabled_for(DebugLevel.TRACE, self.search_component):
            side = "Maximizing" if maximizing else "Minimizing"
            debug.trace(f"{side} at depth {depth}, best score: {score}, best column: {column}",
                        self.search_component)

    def on_best_move(self, column, score, nodes):
        debug.info(f"Best move found: column {column} with score {score} ({nodes} nodes)",
                   self.search_component)


class RecordingObserver(GameObserver, SearchObserver):
    """Keeps every event in memory; handy for tests and replays."""

    def __init__(self):
        self.events: List[Tuple] = []

    def on_move(self, row, column, player):
        self.events.append(('move', row, column, player))

    def on_rejected_move(self, column, player, reason):
        self.events.append(('rejected', column, player, reason))

    def on_undo(self, row, column, player):
        self.events.append(('undo', row, column, player))

    def on_win(self, player, row, column):
        self.events.append(('win', player, row, column))

    def on_draw(self):
        self.events.append(('draw',))

    def on_search_start(self, depth):
        self.events.append(('search', depth))

    def on_node(self, depth, maximizing, score, column):
        self.events.append(('node', depth, maximizing, score, column))

    def on_best_move(self, column, score, nodes):
        self.events.append(('best', column, score, nodes))

    def of_kind(self, kind: str) -> List[Tuple]:
        return [e for e in self.events if e[0] == kind]
