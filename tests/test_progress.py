import sqlite3

import pytest

from towerdef.progress import ProgressManager, ProgressSeeder, UserProgressDB
from towerdef.repositories import (
    GameProgress,
    GameProgressRepository,
    MapInfo,
    MapProgress,
    MapsProgressRepository,
    MapsRepository,
    TowerUnlock,
    TowerUnlocksRepository,
)
from towerdef.resultset import DatabaseError


def _manager():
    return ProgressManager(
        GameProgressRepository(),
        MapsRepository(),
        MapsProgressRepository(),
        TowerUnlocksRepository(),
        UserProgressDB(),
    )


def _with_unlocks(path):
    connection = sqlite3.connect(path)
    connection.executescript(
        "CREATE TABLE tower_unlocks (id INTEGER PRIMARY KEY, name TEXT, "
        "require_level INTEGER, unlocked INTEGER);"
        "INSERT INTO tower_unlocks VALUES (1, 'pine', 2, 0), (2, 'oak', 3, 0);"
    )
    connection.commit()
    connection.close()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "progress.sqlite")


def test_create_tables_and_table_exists():
    with UserProgressDB() as db:
        db.open(":memory:")
        assert db.table_exists("maps") is False
        db.create_tables()
        assert all(db.table_exists(name) for name in ("game_progress", "maps", "map_progress"))
    assert db.connection is None


def test_table_exists_when_closed_is_false():
    assert UserProgressDB().table_exists("maps") is False


def test_open_bad_path_raises(tmp_path):
    with pytest.raises(DatabaseError):
        UserProgressDB().open(str(tmp_path / "missing" / "dir" / "x.sqlite"))


def test_seeder_seeds_once():
    with UserProgressDB() as db:
        db.open(":memory:")
        db.create_tables()
        maps_repo = MapsRepository()
        seeder = ProgressSeeder(GameProgressRepository(), maps_repo, MapsProgressRepository())
        seeder.seed(db.connection)
        seeder.seed(db.connection)
        assert maps_repo.load(db.connection) == [
            MapInfo(1, "Pondside path"),
            MapInfo(2, "Crescent cliff"),
            MapInfo(3, "Looping turn"),
        ]
        assert GameProgressRepository().load(db.connection) == GameProgress(1, 0, 0, 1)
        assert MapsProgressRepository().load(db.connection) == [
            MapProgress(map_info.id, 0) for map_info in maps_repo.load(db.connection)
        ]


def test_load_all_fresh_database(db_path):
    manager = _manager()
    manager.load_all(db_path)
    assert manager.game_progress == GameProgress(1, 0, 0, 1)
    assert [map_info.name for map_info in manager.maps] == [
        "Pondside path", "Crescent cliff", "Looping turn"
    ]
    assert all(progress.max_wave == 0 for progress in manager.maps_progress)
    assert len(manager.maps_progress) == len(manager.maps)
    assert manager.tower_unlocks is None
    manager.close_db()


def test_coins_and_level_persist(db_path):
    manager = _manager()
    manager.load_all(db_path)
    manager.update_coins(1, 77)
    manager.update_loaded_level(1, 150, 2)
    manager.close_db()

    reloaded = _manager()
    reloaded.load_all(db_path)
    assert reloaded.game_progress.coins == 77
    assert reloaded.game_progress.level == 1
    reloaded.update_loaded_level(1, 150, 2)
    reloaded.update_level_to_db(1)
    reloaded.close_db()

    again = _manager()
    again.load_all(db_path)
    assert (again.game_progress.level_xp, again.game_progress.level) == (150, 2)
    again.close_db()


def test_update_max_wave_keeps_best(db_path):
    manager = _manager()
    manager.load_all(db_path)
    manager.update_max_wave(2, 8)
    manager.update_max_wave(2, 4)
    assert manager.maps_progress[1].max_wave == 8
    manager.close_db()

    reloaded = _manager()
    reloaded.load_all(db_path)
    assert reloaded.maps_progress[1] == MapProgress(2, 8)
    reloaded.close_db()


def test_map_lookup_and_upsert(db_path):
    manager = _manager()
    manager.load_all(db_path)
    assert manager.get_map_by_id(3) == MapInfo(3, "Looping turn")
    manager.upsert_map(MapInfo(3, "Renamed turn"))
    assert manager.get_map_by_id(3) == MapInfo(3, "Renamed turn")
    with pytest.raises(LookupError):
        manager.get_map_by_id(9)
    manager.close_db()


def test_unlock_tower_and_delete_progress(db_path):
    _with_unlocks(db_path)
    manager = _manager()
    manager.load_all(db_path)
    assert manager.tower_unlocks == [
        TowerUnlock(1, "pine", 2, False),
        TowerUnlock(2, "oak", 3, False),
    ]
    manager.unlock_tower(2)
    assert manager.tower_unlocks[1].unlocked is True
    manager.update_coins(1, 50)
    manager.update_max_wave(1, 6)

    manager.delete_progress()
    assert manager.game_progress == GameProgress(1, 0, 0, 1)
    assert all(progress.max_wave == 0 for progress in manager.maps_progress)
    stored = TowerUnlocksRepository().load_all(manager.db_context.connection)
    assert [unlock.unlocked for unlock in stored] == [False, False]
    manager.close_db()
    assert manager.db_context.connection is None