"""Record types and SQLite repositories for the player's saved progress."""

from __future__ import annotations

from dataclasses import dataclass

from .resultset import execute


def _quote(value):
    """Render ``value`` as an SQL text literal."""
    return "'" + str(value).replace("'", "''") + "'"


@dataclass
class GameProgress:
    """Overall progress of a player: coins and experience level."""

    id: int = 1
    coins: int = 0
    level_xp: int = 0
    level: int = 1


@dataclass
class MapInfo:
    """A playable map."""

    id: int = 0
    name: str = ""


@dataclass
class MapProgress:
    """The best wave reached on one map."""

    map_id: int = 0
    max_wave: int = 0


@dataclass
class TowerUnlock:
    """A tower that becomes available once the player reaches a level."""

    id: int = 0
    name: str = ""
    require_level: int = 0
    unlocked: bool = False


class GameProgressRepository:
    """Reads and writes the ``game_progress`` table."""

    def load(self, db):
        """Return the stored progress, or None when the table is empty.

        When several rows exist the last one read wins.
        """
        result = execute(db, "SELECT id, coins, level_xp, level FROM game_progress;")
        if not len(result):
            return None
        last = len(result) - 1
        return GameProgress(
            id=result.integer(last, 0),
            coins=result.integer(last, 1),
            level_xp=result.integer(last, 2),
            level=result.integer(last, 3),
        )

    def update_level(self, db, progress_id, level_xp, level):
        execute(
            db,
            f"UPDATE game_progress SET level_xp = {int(level_xp)}, level = {int(level)} "
            f"WHERE id = {int(progress_id)};",
        )

    def delete_progress(self, db, progress_id):
        execute(db, f"DELETE FROM game_progress WHERE id = {int(progress_id)};")

    def update_coins(self, db, progress_id, coins):
        execute(
            db,
            f"UPDATE game_progress SET coins = {int(coins)} WHERE id = {int(progress_id)};",
        )

    def upsert(self, db, progress):
        execute(
            db,
            "INSERT INTO game_progress(id, coins, level_xp, level) "
            f"VALUES({int(progress.id)},{int(progress.coins)},"
            f"{int(progress.level_xp)},{int(progress.level)}) "
            "ON CONFLICT(id) DO UPDATE SET coins = excluded.coins, "
            "level_xp = excluded.level_xp, level = excluded.level;",
        )

    def exists(self, db):
        return len(execute(db, "SELECT 1 FROM game_progress LIMIT 1;")) != 0


class MapsProgressRepository:
    """Reads and writes the ``map_progress`` table."""

    def load(self, db):
        result = execute(db, "SELECT map_id, max_wave FROM map_progress;")
        return [
            MapProgress(map_id=result.integer(row, 0), max_wave=result.integer(row, 1))
            for row in range(len(result))
        ]

    def exists(self, db, map_id):
        query = f"SELECT 1 FROM map_progress WHERE map_id = {int(map_id)} LIMIT 1;"
        return len(execute(db, query)) != 0

    def upsert(self, db, progress):
        execute(
            db,
            "INSERT INTO map_progress(map_id, max_wave) "
            f"VALUES({int(progress.map_id)},{int(progress.max_wave)}) "
            "ON CONFLICT(map_id) DO UPDATE SET max_wave = excluded.max_wave;",
        )

    def update_max_wave(self, db, map_id, max_wave):
        """Raise the stored best wave; a lower value leaves it unchanged."""
        execute(
            db,
            f"UPDATE map_progress SET max_wave = {int(max_wave)} "
            f"WHERE map_id = {int(map_id)} AND max_wave < {int(max_wave)};",
        )

    def delete_progress(self, db):
        execute(db, "DELETE FROM map_progress;")


class MapsRepository:
    """Reads and writes the ``maps`` table."""

    def load(self, db):
        result = execute(db, "SELECT id, name FROM maps;")
        return [
            MapInfo(id=result.integer(row, 0), name=result.text(row, 1))
            for row in range(len(result))
        ]

    def get_map_by_id(self, db, map_id):
        """Return the map with ``map_id``; raise LookupError if there is none."""
        result = execute(db, f"SELECT id, name FROM maps WHERE id = {int(map_id)};")
        if not len(result):
            raise LookupError(f"no map with id {map_id}")
        return MapInfo(id=result.integer(0, 0), name=result.text(0, 1))

    def upsert(self, db, map_info):
        execute(
            db,
            f"INSERT INTO maps(id, name) VALUES({int(map_info.id)},{_quote(map_info.name)}) "
            "ON CONFLICT(id) DO UPDATE SET name = excluded.name;",
        )

    def count(self, db):
        return execute(db, "SELECT COUNT(*) FROM maps;").integer(0, 0)


class TowerUnlocksRepository:
    """Reads and writes the ``tower_unlocks`` table."""

    def load_all(self, db):
        result = execute(db, "SELECT id, name, require_level, unlocked FROM tower_unlocks;")
        return [
            TowerUnlock(
                id=result.integer(row, 0),
                name=result.text(row, 1),
                require_level=result.integer(row, 2),
                unlocked=bool(result.integer(row, 3)),
            )
            for row in range(len(result))
        ]

    def unlock_tower(self, db, tower_id):
        execute(db, f"UPDATE tower_unlocks SET unlocked = 1 WHERE id = {int(tower_id)};")

    def reset_unlocks(self, db):
        execute(db, "UPDATE tower_unlocks SET unlocked = 0 WHERE unlocked = 1;")