"""
SQLite база данных для таблицы рекордов.
"""
import logging
import sqlite3
from collections import namedtuple

from config import DB_PATH, DIFFICULTY_RANK, TOP_SCORES_LIMIT

logger = logging.getLogger(__name__)

ScoreRecord = namedtuple("ScoreRecord", ["username", "score", "difficulty"])


class ScoreServiceError(Exception):
    """Не удалось записать или прочитать рекорды"""


def rank_scores(records, limit=TOP_SCORES_LIMIT):
    """
    Сортировка рекордов: сначала по сложности (hard > medium > easy),
    потом по очкам по убыванию. Сложность важнее очков.
    Неизвестная сложность идёт после easy.
    """
    unknown = len(DIFFICULTY_RANK)
    ranked = sorted(records,
                    key=lambda r: (DIFFICULTY_RANK.get(r.difficulty, unknown), -r.score))
    return ranked[:limit]


class ScoreDatabase:
    def __init__(self, db_path=DB_PATH):
        self.db_path = db_path
        self.conn = None
        self._init_db()

    def _init_db(self):
        """Инициализация базы данных"""
        try:
            self.conn = sqlite3.connect(self.db_path)
            cursor = self.conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS scores (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    difficulty TEXT NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            ''')
            self.conn.commit()
        except sqlite3.Error as e:
            raise ScoreServiceError(f"Cannot open score database {self.db_path}: {e}") from e

    def submit_score(self, username, score, difficulty):
        """Сохранить результат игры"""
        try:
            cursor = self.conn.cursor()
            cursor.execute('''
                INSERT INTO scores (username, score, difficulty)
                VALUES (?, ?, ?)
            ''', (username, int(score), difficulty))
            self.conn.commit()
        except sqlite3.Error as e:
            raise ScoreServiceError(f"Cannot save score for {username}: {e}") from e
        logger.info("Saved score %s (%s) for %s", score, difficulty, username)
        return cursor.lastrowid

    def fetch_scores(self):
        """Все рекорды в порядке добавления"""
        try:
            cursor = self.conn.cursor()
            cursor.execute('''
                SELECT username, score, difficulty FROM scores ORDER BY id
            ''')
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise ScoreServiceError(f"Cannot read scores: {e}") from e
        return [ScoreRecord(*row) for row in rows]

    def fetch_top_scores(self, limit=TOP_SCORES_LIMIT):
        return rank_scores(self.fetch_scores(), limit)

    def close(self):
        """Закрыть соединение"""
        if self.conn:
            self.conn.close()
