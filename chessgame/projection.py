"""Board projection and screen-to-board coordinate helpers for a graphical view."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Matrix4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]
Color = tuple[float, float, float]

DEFAULT_FAR = 1000.0
DESK_WIDTH = 8
DESK_HEIGHT = 8

BACKGROUND_COLOR: Color = (0.9, 0.9, 0.9)
DARK_CELL_COLOR: Color = (0.2, 0.2, 0.1)
LIGHT_CELL_COLOR: Color = (0.9, 0.9, 0.7)

IDENTITY: Matrix4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)


@dataclass
class ChessProjection:
    """Orthographic projection keeping the [-1, 1] board square fully visible."""

    left: float = -1.0
    right: float = 1.0
    bottom: float = -1.0
    top: float = 1.0
    near: float = 0.0
    far: float = DEFAULT_FAR

    def update(self, width: float, height: float) -> None:
        """Widen the shorter axis of the view so the board keeps its aspect."""
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        if width > height:
            delta = width / height - 1.0
            self.left, self.right = -1.0 - delta, 1.0 + delta
            self.top, self.bottom = 1.0, -1.0
        else:
            delta = height / width - 1.0
            self.left, self.right = -1.0, 1.0
            self.top, self.bottom = 1.0 + delta, -1.0 - delta

    def projection_matrix(self) -> Matrix4:
        """Right-handed orthographic matrix, row-major, mapping depth to [0, 1]."""
        if self.right == self.left or self.top == self.bottom or self.near == self.far:
            raise ValueError("degenerate projection bounds")
        rcp_width = 1.0 / (self.right - self.left)
        rcp_height = 1.0 / (self.top - self.bottom)
        r = 1.0 / (self.near - self.far)
        return (
            (2.0 * rcp_width, 0.0, 0.0, -(self.left + self.right) * rcp_width),
            (0.0, 2.0 * rcp_height, 0.0, -(self.top + self.bottom) * rcp_height),
            (0.0, 0.0, r, r * self.near),
            (0.0, 0.0, 0.0, 1.0),
        )


@dataclass(frozen=True)
class Sprite:
    """A coloured rectangle placed in the scene."""

    size: tuple[float, float]
    translation: tuple[float, float, float]
    color: Color


def camera_transform(far: float = DEFAULT_FAR) -> Matrix4:
    """Camera placement just in front of the far plane, row-major."""
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, far - 0.1),
        (0.0, 0.0, 0.0, 1.0),
    )


def board_sprites(size_in_cells: tuple[int, int] = (DESK_WIDTH, DESK_HEIGHT)) -> list[Sprite]:
    """Checkered cells filling the [-1, 1] square, column by column from a1."""
    columns, rows = size_in_cells
    if columns <= 0 or rows <= 0:
        raise ValueError(f"board size must be positive, got {columns}x{rows}")
    size = 2.0 / max(columns, rows)
    delta = 1.0 - size / 2.0
    return [
        Sprite(
            size=(size, size),
            translation=(x * size - delta, y * size - delta, 0.0),
            color=DARK_CELL_COLOR if (x + y) % 2 == 0 else LIGHT_CELL_COLOR,
        )
        for x in range(columns)
        for y in range(rows)
    ]


def translation_sprites() -> list[Sprite]:
    """Two unit squares on opposite quadrants, showing the projected coordinates."""
    return [
        Sprite(size=(1.0, 1.0), translation=(-0.5, -0.5, 0.0), color=DARK_CELL_COLOR),
        Sprite(size=(1.0, 1.0), translation=(0.5, 0.5, 0.0), color=DARK_CELL_COLOR),
    ]


def _saturating_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def cursor_to_cell(x: float, y: float, width: float, height: float) -> tuple[int, int]:
    """Board cell under a cursor given in window pixels, origin at the bottom left."""
    if width <= 0 or height <= 0:
        raise ValueError(f"window size must be positive, got {width}x{height}")
    x_multiplier = width / DESK_WIDTH
    y_multiplier = height / DESK_HEIGHT
    return _saturating_u8(x / x_multiplier), _saturating_u8(y / y_multiplier)


def cursor_from_center(
    x: float,
    y: float,
    width: float,
    height: float,
    camera_matrix: Sequence[Sequence[float]] | None = None,
) -> tuple[float, float]:
    """World coordinates of a cursor: pixels relative to the window centre, through the camera."""
    matrix = IDENTITY if camera_matrix is None else camera_matrix
    if len(matrix) != 4 or any(len(row) != 4 for row in matrix):
        raise ValueError("camera matrix must be 4x4")
    vector = (x - width / 2.0, y - height / 2.0, 0.0, 1.0)
    world_x, world_y = (sum(a * b for a, b in zip(row, vector)) for row in matrix[:2])
    return world_x, world_y