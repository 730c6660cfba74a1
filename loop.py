"""
Игровой цикл: таймер, состояния игры и конец партии.

Состояния: IDLE -> RUNNING <-> PAUSED, RUNNING -> GAME_OVER,
из любого состояния restart() возвращает в IDLE.
"""
import logging
from enum import Enum

from config import (SPEED, DEFAULT_DIFFICULTY, GAME_OVER_DELAY_MS, BLOCK_SIZE,
                    FONT, GAME_OVER, SCORE_FONT_SIZE, GAME_OVER_FONT_SIZE)
from database import ScoreServiceError
from env import GameSession

logger = logging.getLogger(__name__)


class LoopState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def tick_interval(difficulty):
    """Период тика в мс. Неизвестная сложность -> medium."""
    if difficulty not in SPEED:
        logger.warning("Unknown difficulty %r, falling back to %s",
                       difficulty, DEFAULT_DIFFICULTY)
        return SPEED[DEFAULT_DIFFICULTY]
    return SPEED[difficulty]


class GameLoop:
    def __init__(self, surface, scheduler, score_service=None,
                 difficulty=DEFAULT_DIFFICULTY, on_show_high_scores=None,
                 session_factory=GameSession):
        self.surface = surface
        self.scheduler = scheduler
        self.score_service = score_service
        self.difficulty = difficulty
        self.on_show_high_scores = on_show_high_scores
        self.session_factory = session_factory

        self.username = None
        self.session = session_factory()
        self.state = LoopState.IDLE
        self.task = scheduler.every(self.interval, self.tick)
        self.pending_display = None

    @property
    def interval(self):
        return tick_interval(self.difficulty)

    @property
    def score(self):
        return self.session.score

    def set_direction(self, direction):
        self.session.snake.set_direction(direction)

    # === Управление ===

    def start(self):
        if self.state is not LoopState.IDLE:
            return False
        self.cancel_pending_display()
        self.task.reschedule(self.interval, self.scheduler.now())
        self.state = LoopState.RUNNING
        return True

    def pause(self):
        if self.state is not LoopState.RUNNING:
            return False
        self.task.stop()
        self.state = LoopState.PAUSED
        return True

    def resume(self):
        if self.state is not LoopState.PAUSED:
            return False
        # Сложность могли поменять на паузе
        self.task.reschedule(self.interval, self.scheduler.now())
        self.state = LoopState.RUNNING
        return True

    def toggle_pause(self):
        if self.state is LoopState.RUNNING:
            return self.pause()
        return self.resume()

    def restart(self):
        """Новая партия с нуля; ждём start()"""
        self.task.stop()
        self.cancel_pending_display()
        self.session = self.session_factory()
        self.state = LoopState.IDLE
        self.surface.clear()

    def cancel_pending_display(self):
        # Рекорды прошлой партии не должны всплыть поверх новой
        if self.pending_display is not None:
            self.pending_display.cancel()
            self.pending_display = None

    # === Тик ===

    def tick(self):
        session = self.session
        self.surface.clear()
        self.surface.draw_text(f"Score: {session.score}", BLOCK_SIZE, BLOCK_SIZE,
                               SCORE_FONT_SIZE, FONT, align="baseline")
        session.step()
        if session.over:
            self.game_over()
            return
        session.draw(self.surface)

    def game_over(self):
        self.task.stop()
        self.state = LoopState.GAME_OVER
        self.surface.draw_text("Game Over", self.surface.width / 2, self.surface.height / 2,
                               GAME_OVER_FONT_SIZE, GAME_OVER, align="center")
        print(f"Game over: score {self.score} ({self.difficulty})")

        if self.username:
            self.submit_score()
        # Показ рекордов не ждёт сохранения, просто через секунду
        if self.on_show_high_scores is not None:
            self.pending_display = self.scheduler.call_later(
                GAME_OVER_DELAY_MS, self.on_show_high_scores)

    def submit_score(self):
        if self.score_service is None:
            return
        try:
            self.score_service.submit_score(self.username, self.score, self.difficulty)
        except ScoreServiceError as e:
            logger.error("Score not saved: %s", e)
