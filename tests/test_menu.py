from __future__ import annotations

from blockfall.menu import Menu, MenuItem, PauseItem, game_over_menu, pause_menu


def test_selection_starts_on_first_selectable_item() -> None:
    menu = pause_menu()
    assert menu.selected == 1
    assert menu.select() is PauseItem.CONTINUE


def test_selection_wraps_around() -> None:
    menu = pause_menu()
    menu.down()
    assert menu.select() is PauseItem.RESTART
    menu.down()
    assert menu.select() is PauseItem.EXIT
    menu.down()
    assert menu.select() is PauseItem.CONTINUE
    menu.up()
    assert menu.select() is PauseItem.EXIT


def test_unselectable_items_are_skipped() -> None:
    menu = Menu(
        [
            MenuItem("a", "A"),
            MenuItem("gap", "----", selectable=False),
            MenuItem("b", "B"),
        ]
    )
    menu.advance(1)
    assert menu.select() == "b"
    menu.advance(5)
    assert menu.select() == "a"
    menu.advance(-1)
    assert menu.select() == "b"


def test_menu_without_selectable_items() -> None:
    menu = Menu([MenuItem("title", "Title", selectable=False)])
    assert menu.selected is None
    menu.down()
    menu.up()
    assert menu.select() is None


def test_game_over_menu_labels() -> None:
    assert list(game_over_menu().labels()) == [
        ("You Died", False),
        ("New Game", True),
        ("Exit", True),
    ]
