"""Database module.

All mixins compose into the Database class via multiple inheritance.
The MRO (Method Resolution Order) ensures ConnectionBase.__init__
runs first, then SchemaMixin._ensure_schema() creates the schema.
"""

from __future__ import annotations

from steam_cli.core.db.cache_queries import AppCacheMixin
from steam_cli.core.db.connection import ConnectionBase
from steam_cli.core.db.dictionary_queries import DictionaryQueryMixin
from steam_cli.core.db.models import FALLBACK_RANK, DictFindItem, DictItem, DictKind
from steam_cli.core.db.schema import SchemaMixin

__all__ = [
    "FALLBACK_RANK",
    "Database",
    "DictFindItem",
    "DictItem",
    "DictKind",
]


class Database(
    SchemaMixin,
    DictionaryQueryMixin,
    AppCacheMixin,
    ConnectionBase,
):
    """Main database class composing all query mixins.

    Inherits connection management from ConnectionBase,
    schema handling from SchemaMixin, and all query methods
    from the remaining mixins.
    """

    pass
