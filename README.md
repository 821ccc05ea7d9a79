# towerdef

Building blocks for a tower defence game, written as plain Python objects with
no graphics attached. It uses only the standard library. The package covers:

- player progress kept in SQLite: coins, experience and level, the maps, the
  best wave reached on each map, and which towers are unlocked
- enemies that walk a list of waypoints, can be slowed and damaged, and
  projectiles that home in on a target enemy
- collision checks for placing an object on the map, and buying and selling
  with the resources of a play session
- a click-to-select state machine driven by a pointer snapshot you pass in
- a small timestamp type that parses and formats date strings, with calendar
  arithmetic on it

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `towerdef.timestamp` | `TimeStamp`, `is_leap_year`, `days_in_year` |
| `towerdef.timecalc` | `add_years`, `add_months`, `add_days`, `add_hours`, `add_minutes`, `add_seconds`, `add_hundredths`, `diff_years`, `diff_months`, `diff_days`, `diff_seconds`, `diff_hundredths` |
| `towerdef.resultset` | `execute`, `ResultSet`, `DatabaseError`, `parse_user_date`, `decode_user_date` |
| `towerdef.repositories` | Record types `GameProgress`, `MapInfo`, `MapProgress`, `TowerUnlock` and the repositories `GameProgressRepository`, `MapsRepository`, `MapsProgressRepository`, `TowerUnlocksRepository` |
| `towerdef.progress` | `UserProgressDB`, `ProgressSeeder`, `ProgressManager` |
| `towerdef.geometry` | `Vector`, `GameObject` |
| `towerdef.selection` | `PointerState`, `CloseArea`, `SelectOnClickHandler` |
| `towerdef.units` | `ResourceType`, `Resource`, `resource_type_from_string`, `Enemy`, `Projectile` |
| `towerdef.managers` | `Rect`, `GameSession`, `objects_collide`, `collides_with_rect`, `CollisionManager`, `PurchaseManager`, `SellManager` |

## Loading player progress

```python
from towerdef.progress import ProgressManager, UserProgressDB
from towerdef.repositories import (
    GameProgressRepository,
    MapsProgressRepository,
    MapsRepository,
    TowerUnlocksRepository,
)

manager = ProgressManager(
    GameProgressRepository(),
    MapsRepository(),
    MapsProgressRepository(),
    TowerUnlocksRepository(),
    UserProgressDB(),
)
manager.load_all("progress.sqlite")
manager.update_max_wave(1, 12)
manager.close_db()
```

On a new database, `load_all` creates the `game_progress`, `maps` and
`map_progress` tables and seeds three maps ("Pondside path", "Crescent cliff",
"Looping turn"), a starting progress row and a best-wave row for each map.
Tower unlocks are read only when a `tower_unlocks` table is already present;
otherwise `manager.tower_unlocks` is `None`. `update_loaded_level` changes only
the loaded values; call `update_level_to_db` to store them.

Query failures raise `towerdef.resultset.DatabaseError`, and
`get_map_by_id` raises `LookupError` for a missing map.

## Buying and selling

```python
from towerdef.managers import GameSession, PurchaseManager, SellManager
from towerdef.units import Resource, ResourceType

session = GameSession()                 # 5 lives; green 30, yellow 5, red 5, blue 0
seller = SellManager(session)
buyer = PurchaseManager(session, {"pine": 10}, seller)

if buyer.can_purchase_tower("pine", "green"):
    buyer.purchase_tower(Resource(ResourceType.GREEN, 10))
print(session.resources[ResourceType.GREEN])   # 20
```

`SellManager.selected_tower` may be any object with a `spent_resources`
attribute holding a `Resource`; selling refunds 40% of it, rounded down.
`can_purchase_upgrade` takes any object with `next_level`, `max_level` and
`costs`.

## Timestamps

```python
from towerdef.timestamp import TimeStamp
from towerdef.timecalc import add_days, diff_days

stamp = TimeStamp.parse("2024-02-28", "YYYY-MM-DD")
later = add_days(stamp, 2)
print(later.strftime("%d %b %Y"))   # 01 Mar 2024
print(diff_days(later, stamp))      # 2
```

Text that does not fit its format gives a stamp whose `valid` is `False`; it
formats as `INVALID`.

## What the package does not do

There is no window, drawing or sound, and no command to run a game. The
package has no tower type of its own, no waves or level maps, no experience
or level-up rules, and no menu or button objects; `CollisionManager` and
`SellManager` work with whatever tower-like objects you give them.