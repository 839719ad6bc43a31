"""Pixel layout of a chess board drawn in a window, optionally beside a side panel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .projection import Color

DESK_WIDTH = 8
DESK_HEIGHT = 8

DISPLAY_WIDTH = 800.0
DISPLAY_HEIGHT = 600.0
SIDE_PANEL_WIDTH = 300.0

CELL_SCALE = 0.95
CELL_FILL = 0.9
CELL_GAP = 0.02
BOARD_X_OFFSET = 0.05
PANEL_BOARD_X_OFFSET = 0.1
BOARD_Y_OFFSET = 0.1
BOARD_MARGIN = 1

BACKGROUND_COLOR: Color = (0.0, 0.0, 0.0)
BLACK_CELL_COLOR: Color = (0.30, 0.05, 0.0)
WHITE_CELL_COLOR: Color = (1.0, 1.0, 1.0)


class Side(Enum):
    """Side a player chooses to play."""

    BLACK = "black"
    WHITE = "white"

    def label(self) -> str:
        """Name shown in the side selector."""
        return self.value.capitalize()


DEFAULT_SIDE = Side.WHITE


@dataclass(frozen=True)
class CellPosition:
    """Column and row of a board cell, (0, 0) being the bottom left."""

    x: int
    y: int


@dataclass(frozen=True)
class Cell:
    """A board cell with its colour, drawn size and centre in window coordinates."""

    position: CellPosition
    color: Color
    size: tuple[float, float]
    translation: tuple[float, float, float]


def board_area(width: float, height: float, panel_width: float = 0.0) -> float:
    """Side of the square area left for the board once the panel is taken away."""
    usable = width - panel_width
    if usable <= 0 or height <= 0:
        raise ValueError(
            f"no room for the board in a {width}x{height} window with a {panel_width} panel"
        )
    return min(usable, height)


def cell_size(
    scale: float, width: float, height: float, panel_width: float = 0.0
) -> tuple[float, float]:
    """Drawn width and height of a cell of the given relative scale."""
    side = board_area(width, height, panel_width)
    return (
        scale / DESK_WIDTH * side * CELL_FILL,
        scale / DESK_HEIGHT * side * CELL_FILL,
    )


def _convert(pos: float, bound_window: float, bound_game: float) -> float:
    tile_size = bound_window / bound_game
    return pos / bound_game * bound_window - bound_window / 2.0 + tile_size / 2.0


def cell_translation(
    position: CellPosition,
    width: float,
    height: float,
    x_offset: float = BOARD_X_OFFSET,
    panel_width: float = 0.0,
) -> tuple[float, float, float]:
    """Centre of a cell relative to the window centre."""
    side = board_area(width, height, panel_width)
    x = x_offset * side + (
        _convert(position.x, side, DESK_WIDTH) - position.x * CELL_GAP * side
    )
    y = BOARD_Y_OFFSET * side + (
        _convert(position.y, side, DESK_HEIGHT) - position.y * CELL_GAP * side
    )
    return (x, y, 0.0)


def spawn_board(
    width: float = DISPLAY_WIDTH,
    height: float = DISPLAY_HEIGHT,
    panel_width: float = 0.0,
    x_offset: float = BOARD_X_OFFSET,
) -> list[Cell]:
    """All 64 cells laid out for the window, column by column from the bottom left."""
    size = cell_size(CELL_SCALE, width, height, panel_width)
    cells = []
    for x in range(DESK_WIDTH):
        for y in range(DESK_HEIGHT):
            position = CellPosition(x, y)
            color = WHITE_CELL_COLOR if (x + y + 1) % 2 == 0 else BLACK_CELL_COLOR
            cells.append(
                Cell(
                    position=position,
                    color=color,
                    size=size,
                    translation=cell_translation(position, width, height, x_offset, panel_width),
                )
            )
    return cells


def simple_board(width: float, height: float) -> list[Cell]:
    """Touching cells centred in the window, with a one-cell margin on the short axis."""
    if width <= 0 or height <= 0:
        raise ValueError(f"window size must be positive, got {width}x{height}")
    if width < height:
        side = width / (DESK_WIDTH + BOARD_MARGIN * 2)
    else:
        side = height / (DESK_HEIGHT + BOARD_MARGIN * 2)
    return [
        Cell(
            position=CellPosition(x, y),
            color=WHITE_CELL_COLOR if (x + y) % 2 == 0 else BLACK_CELL_COLOR,
            size=(side, side),
            translation=(
                x * side - side * DESK_WIDTH / 2.0 + side / 2.0,
                y * side - side * DESK_HEIGHT / 2.0 + side / 2.0,
                0.0,
            ),
        )
        for x in range(DESK_WIDTH)
        for y in range(DESK_HEIGHT)
    ]