"""Tower defence building blocks: SQLite progress storage, enemies and projectiles, placement and trade rules, click selection, and timestamps."""

__version__ = "0.1.0"