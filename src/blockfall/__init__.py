"""Falling-block puzzle engine: field, pieces, bag and per-tick game loop."""

from .bag import Bag
from .board import Board
from .game import Action, Game, GameChange, GameView, MenuView, Signal, line_score
from .game_state import Drop, Fall, GameOver, GameState, Start
from .menu import Menu, MenuItem, PauseItem
from .runner import GameRunner
from .settings import Settings
from .tetromino import Block, Rotation, RotationArity, TetrominoType, preview, rotated_shape
from .utils import format_grid, render_grid

__all__ = [
    "Action",
    "Bag",
    "Block",
    "Board",
    "Drop",
    "Fall",
    "Game",
    "GameChange",
    "GameOver",
    "GameRunner",
    "GameState",
    "GameView",
    "Menu",
    "MenuItem",
    "MenuView",
    "PauseItem",
    "Rotation",
    "RotationArity",
    "Settings",
    "Signal",
    "Start",
    "TetrominoType",
    "format_grid",
    "line_score",
    "preview",
    "render_grid",
    "rotated_shape",
]
