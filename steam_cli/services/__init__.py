from __future__ import annotations

from steam_cli.services.app_detail_service import AppDetailService
from steam_cli.services.dictionary_service import DictionaryService
from steam_cli.services.owned_games_service import OwnedGamesService
from steam_cli.services.store_search_service import StoreSearchService

__all__: list[str] = [
    "AppDetailService",
    "DictionaryService",
    "OwnedGamesService",
    "StoreSearchService",
]
