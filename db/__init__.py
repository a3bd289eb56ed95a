"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Group, Location, Label, Item, ItemField → ORM models
"""

from db.engine import init_db, get_session                      # noqa: F401
from db.models import (                                          # noqa: F401
    Base, Group, Location, Label, Item, ItemField, item_labels,
)
