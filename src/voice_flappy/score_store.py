"""
score_store.py: SQLite key-value storage for the best score.
"""

import sqlite3
from typing import Optional

from .constants import DB_FILE, HIGH_SCORE_KEY


class ScoreStore:
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE):
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)
        self.conn.commit()

    def get_item(self, key: str) -> Optional[str]:
        self.cur.execute("SELECT value FROM Settings WHERE key=?", (key,))
        row = self.cur.fetchone()
        return row[0] if row else None

    def store_item(self, key: str, value: str):
        self.cur.execute(
            "INSERT OR REPLACE INTO Settings (key, value) VALUES (?, ?)", (key, value))
        self.conn.commit()

    def get_high_score(self) -> int:
        """Reads the stored best score. Missing or unreadable values count as 0."""
        raw = self.get_item(HIGH_SCORE_KEY)
        if raw is None:
            return 0
        try:
            score = int(raw)
        except ValueError:
            print(f"Ignoring malformed high score {raw!r}")
            return 0
        return max(score, 0)

    def save_high_score(self, score: int):
        self.store_item(HIGH_SCORE_KEY, str(score))

    def close(self):
        self.conn.close()
