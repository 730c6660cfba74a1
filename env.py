"""
Ядро игры без графики: клетки, поле, еда, змейка и текущая партия.

Координаты в клетках (col, row), (0, 0) - левый верхний угол.
Рамка шириной в одну клетку непроходима.
Рисование идёт через поверхность с методами fill_rect / fill_circle
(см. render.py), поэтому ядро можно гонять в тестах без окна.
"""
from collections import namedtuple
from enum import Enum

import numpy as np

from config import (WIDTH, HEIGHT, BLOCK_SIZE, SNAKE, FOOD, BORDER,
                    SNAKE_START, FOOD_START)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self):
        return _OFFSETS[self]

    @property
    def opposite(self):
        return _OPPOSITES[self]


_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Step(Enum):
    """Итог одного шага змейки"""
    MOVED = "moved"
    ATE = "ate"
    COLLIDED = "collided"


class Cell(namedtuple("Cell", ["col", "row"])):
    """Одна клетка поля. Неизменяемая, сравнение покомпонентное."""
    __slots__ = ()

    def moved(self, direction):
        dcol, drow = direction.offset
        return Cell(self.col + dcol, self.row + drow)

    def draw_square(self, surface, color, size=BLOCK_SIZE):
        surface.fill_rect(self.col * size, self.row * size, size, size, color)

    def draw_circle(self, surface, color, size=BLOCK_SIZE):
        center_x = self.col * size + size / 2
        center_y = self.row * size + size / 2
        surface.fill_circle(center_x, center_y, size / 2, color)


class Grid:
    """Поле в клетках, вычисленное из размера холста"""

    def __init__(self, width=WIDTH, height=HEIGHT, block_size=BLOCK_SIZE):
        if width % block_size or height % block_size:
            raise ValueError(
                f"Canvas {width}x{height} does not divide into {block_size}px blocks")
        self.width = width
        self.height = height
        self.block_size = block_size
        self.width_in_blocks = width // block_size
        self.height_in_blocks = height // block_size

    def is_border(self, cell):
        return (cell.col == 0 or cell.row == 0 or
                cell.col == self.width_in_blocks - 1 or
                cell.row == self.height_in_blocks - 1)

    def contains(self, cell):
        return (0 <= cell.col < self.width_in_blocks and
                0 <= cell.row < self.height_in_blocks)

    def draw_border(self, surface, color=BORDER):
        size = self.block_size
        surface.fill_rect(0, 0, self.width, size, color)
        surface.fill_rect(0, self.height - size, self.width, size, color)
        surface.fill_rect(0, 0, size, self.height, color)
        surface.fill_rect(self.width - size, 0, size, self.height, color)


class Food:
    def __init__(self, grid, rng=None, position=FOOD_START):
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position = Cell(*position)

    def relocate(self):
        """
        Новая случайная клетка строго внутри рамки.
        Змейку не проверяем - еда может (редко) оказаться под телом.
        """
        col = int(self.rng.integers(1, self.grid.width_in_blocks - 1))
        row = int(self.rng.integers(1, self.grid.height_in_blocks - 1))
        self.position = Cell(col, row)

    def draw(self, surface):
        self.position.draw_circle(surface, FOOD, self.grid.block_size)


class Snake:
    def __init__(self, grid, segments=SNAKE_START, direction=Direction.RIGHT):
        self.grid = grid
        self.segments = [Cell(col, row) for col, row in segments]  # голова первой
        self.direction = direction
        self.next_direction = direction

    @property
    def head(self):
        return self.segments[0]

    def __len__(self):
        return len(self.segments)

    def draw(self, surface):
        for segment in self.segments:
            segment.draw_square(surface, SNAKE, self.grid.block_size)

    def set_direction(self, new_direction):
        # Разворот в шею запрещён, просто игнорируем
        if self.direction.opposite != new_direction:
            self.next_direction = new_direction

    def advance(self, food):
        """Один шаг. При столкновении змейка не меняется."""
        self.direction = self.next_direction
        new_head = self.head.moved(self.direction)

        if self.check_collision(new_head):
            return Step.COLLIDED
        self.segments.insert(0, new_head)

        if new_head == food.position:
            food.relocate()
            return Step.ATE

        self.segments.pop()
        return Step.MOVED

    def check_collision(self, cell):
        # Хвост тоже считается занятым, хотя на этом шаге он бы освободился
        return self.grid.is_border(cell) or cell in self.segments


class GameSession:
    """Состояние одной партии: змейка, еда, счёт"""

    def __init__(self, grid=None, rng=None):
        self.grid = grid or Grid()
        self.snake = Snake(self.grid)
        self.food = Food(self.grid, rng)
        self.score = 0
        self.over = False

    def step(self):
        if self.over:
            return Step.COLLIDED

        result = self.snake.advance(self.food)
        if result is Step.ATE:
            self.score += 1
        elif result is Step.COLLIDED:
            self.over = True
        return result

    def draw(self, surface):
        self.snake.draw(surface)
        self.food.draw(surface)
        self.grid.draw_border(surface)
