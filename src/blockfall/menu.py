"""Selectable text menus used for the pause and game-over overlays."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterator, List, Optional, Sequence, Tuple


class PauseItem(Enum):
    """Identity of the entries in the game's menus."""

    TITLE = "title"
    CONTINUE = "continue"
    RESTART = "restart"
    EXIT = "exit"


@dataclass(frozen=True)
class MenuItem:
    id: Hashable
    label: str
    selectable: bool = True


class Menu:
    """Ordered list of items with at most one selectable item selected.

    The selection starts on the first selectable item and wraps around when
    moved past either end.  A menu without selectable items has no selection.
    """

    def __init__(self, items: Sequence[MenuItem]) -> None:
        self.items: Tuple[MenuItem, ...] = tuple(items)
        choices = self._selectable_indices()
        self.selected: Optional[int] = choices[0] if choices else None

    def _selectable_indices(self) -> List[int]:
        return [i for i, item in enumerate(self.items) if item.selectable]

    def advance(self, direction: int) -> None:
        """Move the selection ``direction`` steps, negative meaning upwards.

        Only the sign of ``direction`` matters.
        """

        if self.selected is None or direction == 0:
            return
        choices = self._selectable_indices()
        if direction > 0:
            after = [i for i in choices if i > self.selected]
            self.selected = after[0] if after else choices[0]
        else:
            before = [i for i in choices if i < self.selected]
            self.selected = before[-1] if before else choices[-1]

    def up(self) -> None:
        self.advance(-1)

    def down(self) -> None:
        self.advance(1)

    def select(self) -> Optional[Hashable]:
        """Return the id of the selected item, or ``None``."""

        if self.selected is None:
            return None
        return self.items[self.selected].id

    def labels(self) -> Iterator[Tuple[str, bool]]:
        for item in self.items:
            yield item.label, item.selectable


def pause_menu() -> Menu:
    return Menu(
        [
            MenuItem(PauseItem.TITLE, "Menu", selectable=False),
            MenuItem(PauseItem.CONTINUE, "Continue"),
            MenuItem(PauseItem.RESTART, "New Game"),
            MenuItem(PauseItem.EXIT, "Exit"),
        ]
    )


def game_over_menu() -> Menu:
    return Menu(
        [
            MenuItem(PauseItem.TITLE, "You Died", selectable=False),
            MenuItem(PauseItem.RESTART, "New Game"),
            MenuItem(PauseItem.EXIT, "Exit"),
        ]
    )
