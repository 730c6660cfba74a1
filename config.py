# Настройки игры
# Холст 400x400, клетка 20 -> поле 20x20 клеток (включая рамку)
WIDTH = 400
HEIGHT = 400

# Сетка
BLOCK_SIZE = 20

# Цвета
BLUE = (21, 101, 192)    # #1565c0
RED = (255, 0, 0)
GRAY = (128, 128, 128)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARK = (40, 40, 40)
LIGHT_GRAY = (150, 150, 150)

SNAKE = BLUE
FOOD = RED
BORDER = GRAY
FONT = BLACK
GAME_OVER = RED
BACKGROUND = WHITE
PANEL = DARK

# Скорость: миллисекунды на один тик
SPEED = {"easy": 200, "medium": 100, "hard": 50}
DEFAULT_DIFFICULTY = "medium"

# Сложные уровни всегда выше в таблице рекордов
DIFFICULTY_RANK = {"hard": 0, "medium": 1, "easy": 2}

# Начальная позиция (голова первой)
SNAKE_START = [(7, 5), (6, 5), (5, 5)]
FOOD_START = (10, 10)

# Таблица рекордов появляется через секунду после конца игры
GAME_OVER_DELAY_MS = 1000
TOP_SCORES_LIMIT = 10
DB_PATH = "snake_scores.db"

# Частота кадров окна (не путать со скоростью змейки)
FPS = 60
PANEL_WIDTH = 220

# Шрифты
SCORE_FONT_SIZE = 20
GAME_OVER_FONT_SIZE = 50
UI_FONT_SIZE = 18

HELP_TEXT = "Use arrow keys to move. Eat apples to grow. Avoid walls and yourself!"
SAVE_TEXT = "Scores are saved automatically. No need to download manually."
