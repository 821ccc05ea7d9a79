"""The progress database: opening it, seeding it and keeping loaded progress in step."""

from __future__ import annotations

import logging
import sqlite3

from .repositories import GameProgress, MapInfo, MapProgress
from .resultset import DatabaseError, execute

_log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS game_progress (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    coins INTEGER DEFAULT 0,
    level_xp INTEGER NOT NULL DEFAULT 0,
    level INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS maps (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT UNIQUE NOT NULL
);

CREATE TABLE IF NOT EXISTS map_progress (
    map_id INTEGER NOT NULL PRIMARY KEY,
    max_wave INTEGER DEFAULT 0,
    FOREIGN KEY(map_id) REFERENCES maps(id)
);
"""

_REQUIRED_TABLES = ("game_progress", "maps", "map_progress")

_DEFAULT_MAPS = (
    MapInfo(1, "Pondside path"),
    MapInfo(2, "Crescent cliff"),
    MapInfo(3, "Looping turn"),
)


class UserProgressDB:
    """Owns the SQLite connection that holds the player's progress."""

    def __init__(self):
        self._connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self, path):
        """Open the database at ``path``; raise DatabaseError on failure."""
        try:
            self._connection = sqlite3.connect(path)
        except sqlite3.Error as error:
            self._connection = None
            raise DatabaseError(f"failed to open {path}: {error}") from error

    def close(self):
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @property
    def connection(self):
        """The open connection, or None when closed."""
        return self._connection

    def table_exists(self, name):
        if self._connection is None:
            return False
        cursor = self._connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;", (name,)
        )
        return cursor.fetchone() is not None

    def create_tables(self):
        """Create the progress tables; on failure close the database and raise."""
        if self._connection is None:
            return
        try:
            execute(self._connection, _SCHEMA)
        except DatabaseError:
            self.close()
            raise


class ProgressSeeder:
    """Fills an empty progress database with the default maps and records."""

    def __init__(self, game_repo, maps_repo, maps_progress_repo):
        self.game_repo = game_repo
        self.maps_repo = maps_repo
        self.maps_progress_repo = maps_progress_repo

    def seed(self, db):
        if self.maps_repo.count(db) == 0:
            for map_info in _DEFAULT_MAPS:
                self.maps_repo.upsert(db, map_info)

        if not self.game_repo.exists(db):
            self.game_repo.upsert(db, GameProgress(1, 0, 0, 1))

        for map_info in self.maps_repo.load(db):
            if not self.maps_progress_repo.exists(db, map_info.id):
                self.maps_progress_repo.upsert(db, MapProgress(map_info.id, 0))


class ProgressManager:
    """Keeps the loaded progress and writes changes through to the database."""

    def __init__(self, game_repo, maps_repo, maps_progress_repo, tower_unlocks_repo, db_context):
        self.game_repo = game_repo
        self.maps_repo = maps_repo
        self.maps_progress_repo = maps_progress_repo
        self.tower_unlocks_repo = tower_unlocks_repo
        self.db_context = db_context
        self.game_progress = None
        self.maps = []
        self.maps_progress = []
        self.tower_unlocks = None

    @property
    def _db(self):
        return self.db_context.connection

    def load_all(self, db_path):
        """Open the database, create and seed it if needed, and load everything.

        Tower unlocks are loaded only when their table is present; otherwise
        ``tower_unlocks`` stays None.
        """
        self.db_context.open(db_path)

        if not all(self.db_context.table_exists(name) for name in _REQUIRED_TABLES):
            _log.info("a progress table is missing; creating tables")
            self.db_context.create_tables()

        db = self._db
        ProgressSeeder(self.game_repo, self.maps_repo, self.maps_progress_repo).seed(db)

        self.game_progress = self.game_repo.load(db)
        self.maps = self.maps_repo.load(db)
        self.maps_progress = self.maps_progress_repo.load(db)
        if self.db_context.table_exists("tower_unlocks"):
            self.tower_unlocks = self.tower_unlocks_repo.load_all(db)
        else:
            self.tower_unlocks = None

    def delete_progress(self):
        """Reset coins, experience, best waves and tower unlocks."""
        db = self._db
        if self.game_progress is not None:
            self.game_repo.upsert(db, GameProgress(1, 0, 0, 1))
            self.game_progress = self.game_repo.load(db)

        if self.maps_progress:
            for map_info in self.maps:
                if self.maps_progress_repo.exists(db, map_info.id):
                    self.maps_progress_repo.upsert(db, MapProgress(map_info.id, 0))
            self.maps_progress = self.maps_progress_repo.load(db)

        if self.tower_unlocks is not None:
            self.tower_unlocks_repo.reset_unlocks(db)

    def close_db(self):
        self.db_context.close()

    def update_coins(self, progress_id, coins):
        self.game_progress.coins = coins
        self.game_repo.update_coins(self._db, progress_id, coins)

    def update_loaded_level(self, progress_id, level_xp, level):
        """Change the loaded level only; see update_level_to_db to store it."""
        self.game_progress.level_xp = level_xp
        self.game_progress.level = level

    def update_level_to_db(self, progress_id):
        self.game_repo.update_level(
            self._db, progress_id, self.game_progress.level_xp, self.game_progress.level
        )

    def get_map_by_id(self, map_id):
        """Return the stored map with ``map_id``; raise LookupError if absent."""
        return self.maps_repo.get_map_by_id(self._db, map_id)

    def upsert_map(self, map_info):
        self.maps_repo.upsert(self._db, map_info)

    def update_max_wave(self, map_id, max_wave):
        """Record ``max_wave`` for the map if it beats the best so far."""
        progress = self.maps_progress[map_id - 1]
        if progress.max_wave < max_wave:
            progress.max_wave = max_wave
            self.maps_progress_repo.update_max_wave(self._db, map_id, max_wave)

    def unlock_tower(self, tower_id):
        self.tower_unlocks[tower_id - 1].unlocked = True
        self.tower_unlocks_repo.unlock_tower(self._db, tower_id)