"""
Змейка с входом по имени и таблицей рекордов.

Использование:
    python play.py                    # База snake_scores.db в текущей папке
    python play.py scores/my.db       # Своя база

Управление: стрелки - движение, ENTER старт, SPACE пауза/продолжить,
R заново, 1/2/3 сложность, H помощь, T рекорды, S сохранение, ESC выход.
"""
import logging
import sys

import pygame

from config import (WIDTH, HEIGHT, PANEL_WIDTH, FPS, DB_PATH, UI_FONT_SIZE,
                    DEFAULT_DIFFICULTY, HELP_TEXT, SAVE_TEXT,
                    PANEL, BACKGROUND, WHITE, BLACK, LIGHT_GRAY, RED)
from database import ScoreDatabase, ScoreServiceError
from env import Direction
from loop import GameLoop, LoopState
from render import PygameSurface
from scheduler import Scheduler

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_UP: Direction.UP,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
}

DIFFICULTY_KEYS = {
    pygame.K_1: "easy",
    pygame.K_2: "medium",
    pygame.K_3: "hard",
}

SUBMIT_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


class LoginForm:
    """Имя и пароль. Пароль никуда не сохраняется."""

    def __init__(self):
        self.username = ""
        self.password = ""
        self.field = "username"
        self.error = None

    def handle_key(self, key, unicode=""):
        """Возвращает имя пользователя, когда форма отправлена"""
        if key == pygame.K_TAB:
            self.field = "password" if self.field == "username" else "username"
        elif key in SUBMIT_KEYS:
            username = self.username.strip()
            if not username:
                self.error = "Enter a username"
                return None
            self.password = ""
            self.error = None
            return username
        elif key == pygame.K_BACKSPACE:
            setattr(self, self.field, getattr(self, self.field)[:-1])
        elif unicode and unicode.isprintable():
            setattr(self, self.field, getattr(self, self.field) + unicode)
        return None


class GameController:
    """Кнопки и экраны вокруг игрового цикла (без окна, чтобы тестировать)"""

    def __init__(self, surface, scheduler, score_service=None):
        self.score_service = score_service
        self.loop = GameLoop(surface, scheduler, score_service,
                             difficulty=DEFAULT_DIFFICULTY,
                             on_show_high_scores=self.show_high_scores)
        self.login = LoginForm()
        self.username = None
        self.show_help = False
        self.help_paused = False
        self.show_scores = False
        self.high_scores = []
        self.notice = None

    @property
    def logged_in(self):
        return self.username is not None

    @property
    def high_scores_visible(self):
        # Таблица не закрывает идущую игру
        return self.show_scores and self.loop.state is not LoopState.RUNNING

    def log_in(self, username):
        self.username = username
        self.loop.username = username
        print(f"Logged in: {username}")

    def show_high_scores(self):
        self.high_scores = self.fetch_high_scores()
        self.show_scores = True

    def fetch_high_scores(self):
        if self.score_service is None:
            return []
        try:
            return self.score_service.fetch_top_scores()
        except ScoreServiceError as e:
            logger.error("Cannot load high scores: %s", e)
            return []

    def toggle_high_scores(self):
        if self.show_scores:
            self.show_scores = False
        else:
            self.show_high_scores()

    def toggle_help(self):
        """Помощь ставит игру на паузу, как alert() в браузере"""
        if not self.show_help:
            self.show_help = True
            self.help_paused = self.loop.pause()
        else:
            self.show_help = False
            if self.help_paused:
                self.loop.resume()
            self.help_paused = False

    def set_difficulty(self, difficulty):
        # Как select в браузере: читается при старте и при снятии с паузы
        if self.loop.state in (LoopState.IDLE, LoopState.PAUSED):
            self.loop.difficulty = difficulty
            return True
        return False

    def handle_key(self, key, unicode=""):
        """Возвращает False, когда пора выходить"""
        if key == pygame.K_ESCAPE:
            return False

        if not self.logged_in:
            username = self.login.handle_key(key, unicode)
            if username:
                self.log_in(username)
            return True

        if self.show_help:
            # Пока открыта помощь, остальные клавиши не работают
            if key == pygame.K_h or key in SUBMIT_KEYS:
                self.toggle_help()
            return True

        if key in KEY_DIRECTIONS:
            self.loop.set_direction(KEY_DIRECTIONS[key])
        elif key in DIFFICULTY_KEYS:
            self.set_difficulty(DIFFICULTY_KEYS[key])
        elif key in SUBMIT_KEYS:
            if self.loop.start():
                self.show_scores = False
        elif key == pygame.K_SPACE:
            self.loop.toggle_pause()
        elif key == pygame.K_r:
            self.loop.restart()
        elif key == pygame.K_h:
            self.toggle_help()
        elif key == pygame.K_t:
            self.toggle_high_scores()
        elif key == pygame.K_s:
            self.notice = SAVE_TEXT
        return True


class SnakeApp:
    def __init__(self, db_path=DB_PATH):
        pygame.init()

        self.screen = pygame.display.set_mode((WIDTH + PANEL_WIDTH, HEIGHT))
        pygame.display.set_caption('Snake')
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('arial', UI_FONT_SIZE)
        self.big_font = pygame.font.SysFont('arial', 28)

        try:
            self.scores = ScoreDatabase(db_path)
        except ScoreServiceError as e:
            # Играть можно и без рекордов
            logger.error("%s", e)
            self.scores = None

        self.surface = PygameSurface()
        self.scheduler = Scheduler(pygame.time.get_ticks)
        self.controller = GameController(self.surface, self.scheduler, self.scores)

    def text(self, text, x, y, color=WHITE, font=None):
        surf = (font or self.font).render(text, True, color)
        self.screen.blit(surf, (x, y))

    def wrap(self, text, width):
        lines, line = [], ""
        for word in text.split():
            candidate = f"{line} {word}".strip()
            if self.font.size(candidate)[0] > width and line:
                lines.append(line)
                line = word
            else:
                line = candidate
        if line:
            lines.append(line)
        return lines

    def draw_login(self):
        form = self.controller.login
        self.screen.fill(PANEL)
        self.text("Snake - Login", 40, 60, font=self.big_font)

        fields = [("username", "Username:", form.username),
                  ("password", "Password:", "*" * len(form.password))]
        y = 140
        for name, label, value in fields:
            color = WHITE if form.field == name else LIGHT_GRAY
            self.text(label, 40, y, color)
            box = pygame.Rect(160, y - 4, 260, 28)
            pygame.draw.rect(self.screen, BACKGROUND, box)
            pygame.draw.rect(self.screen, color, box, 2)
            self.text(value, 166, y, BLACK)
            y += 50

        self.text("TAB - next field, ENTER - log in", 40, y + 10, LIGHT_GRAY)
        if form.error:
            self.text(form.error, 40, y + 40, RED)

    def draw_panel(self):
        controller = self.controller
        loop = controller.loop
        pygame.draw.rect(self.screen, PANEL, pygame.Rect(WIDTH, 0, PANEL_WIDTH, HEIGHT))

        lines = [
            f"Player: {controller.username}",
            f"Score: {loop.score}",
            f"Difficulty: {loop.difficulty}",
            f"State: {loop.state.value}",
            "",
            "ENTER  Start",
            "SPACE  " + ("Resume" if loop.state is LoopState.PAUSED else "Pause"),
            "R      Restart",
            "1/2/3  Easy/Medium/Hard",
            "H      Help",
            "T      High scores",
            "S      Save",
            "ESC    Quit",
        ]
        for i, line in enumerate(lines):
            self.text(line, WIDTH + 10, 15 + i * 22)

        if controller.notice:
            for i, line in enumerate(self.wrap(controller.notice, PANEL_WIDTH - 20)):
                self.text(line, WIDTH + 10, HEIGHT - 70 + i * 20, LIGHT_GRAY)

    def draw_overlay(self, title, lines):
        overlay = pygame.Surface((WIDTH - 40, HEIGHT - 40), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 210))
        self.screen.blit(overlay, (20, 20))
        self.text(title, 40, 35, font=self.big_font)
        for i, line in enumerate(lines):
            self.text(line, 40, 80 + i * 24)

    def draw_high_scores(self):
        rows = [f"{'#':<3}{'Player':<14}{'Score':>6}  Difficulty"]
        for i, record in enumerate(self.controller.high_scores):
            rows.append(f"{i + 1:<3}{record.username[:12]:<14}{record.score:>6}  {record.difficulty}")
        if len(rows) == 1:
            rows.append("No scores yet")
        self.draw_overlay("High Scores", rows)

    def draw(self):
        if not self.controller.logged_in:
            self.draw_login()
        else:
            self.surface.blit_to(self.screen)
            self.draw_panel()
            if self.controller.high_scores_visible:
                self.draw_high_scores()
            if self.controller.show_help:
                self.draw_overlay("Help", self.wrap(HELP_TEXT, WIDTH - 80))
        pygame.display.flip()

    def run(self):
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.controller.handle_key(event.key, event.unicode) and running

            self.scheduler.run_pending()
            self.draw()
            self.clock.tick(FPS)

        if self.scores:
            self.scores.close()
        pygame.quit()


def main(argv=None):
    argv = sys.argv if argv is None else argv
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    db_path = argv[1] if len(argv) > 1 else DB_PATH
    SnakeApp(db_path).run()


if __name__ == "__main__":
    main()
