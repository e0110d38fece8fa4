#!/usr/bin/env python3
"""steam-cli - Main Entry Point.

Local Steam catalog lookups: tag/genre/category dictionaries, store
search, cached app details and owned games.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from steam_cli.config import config
from steam_cli.core.db import Database, DictFindItem, DictItem, DictKind
from steam_cli.core.errors import AppError, InternalError
from steam_cli.core.logging import logger, setup_logging
from steam_cli.core.seed_builder import ensure_seed_snapshot
from steam_cli.integrations.models import AppDetails
from steam_cli.integrations.steam_store import SteamStoreClient
from steam_cli.integrations.steam_web_api import SteamWebAPI
from steam_cli.services import AppDetailService, DictionaryService, OwnedGamesService, StoreSearchService
from steam_cli.services.owned_games_service import OwnedGamesPage
from steam_cli.services.store_search_service import SearchResult
from steam_cli.utils.output import DataSource, OutputFormat, print_error, print_success
from steam_cli.version import __app_name__, __version__

__all__ = ["build_parser", "main", "run"]


@dataclass(frozen=True)
class DictListData:
    items: list[DictItem]

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class DictFindData:
    items: list[DictFindItem]

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class AppData:
    app: AppDetails

    def to_dict(self) -> dict[str, Any]:
        return {"app": self.app.to_dict()}


# ---------------------------------------------------------------------------
# Human renderers
# ---------------------------------------------------------------------------


def _print_dict_list(kind: DictKind, items: list[DictItem]) -> None:
    print(f"{kind.value} ({len(items)})")
    for item in items:
        print(f"{item.id}\t{item.name}")


def _print_dict_find(kind: DictKind, query: str, items: list[DictFindItem]) -> None:
    print(f"{kind.value} find '{query}' ({len(items)})")
    for item in items:
        print(f"{item.id}\t{item.name}\t{item.rank:.4f}")


def _print_search(result: SearchResult) -> None:
    print(f"search results ({len(result.items)})")
    for item in result.items:
        if item.price is not None:
            print(f"{item.appid}\t{item.name}\t{item.price}")
        else:
            print(f"{item.appid}\t{item.name}")

    if result.facets is not None:
        print(f"\nrelated tag facets ({len(result.facets)})")
        for facet in result.facets:
            print(f"{facet.tagid}\t{facet.count}\tselected={str(facet.selected).lower()}")


def _print_app(app: AppDetails) -> None:
    print(f"{app.name} ({app.appid})")
    if app.short_description:
        print(app.short_description)
    print("genres: " + ", ".join(genre.name for genre in app.genres))
    print("categories: " + ", ".join(category.name for category in app.categories))


def _print_owned(page: OwnedGamesPage) -> None:
    print(f"owned games for {page.steamid} ({len(page.items)})")
    for game in page.items:
        print(f"{game.appid}\t{game.name or 'Unknown'}\t{game.playtime_forever_min}m")


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _global_options(suppress: bool) -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand."""
    parent = argparse.ArgumentParser(add_help=False)
    format_default = argparse.SUPPRESS if suppress else OutputFormat.HUMAN.value
    flag_default = argparse.SUPPRESS if suppress else False
    parent.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=format_default,
        help="output format (default: human)",
    )
    parent.add_argument("--json", action="store_true", default=flag_default, help="shorthand for --format json")
    parent.add_argument("-v", "--verbose", action="store_true", default=flag_default, help="enable debug logging")
    return parent


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=int, default=20, help="page size, 1-100 (default: 20)")
    parser.add_argument("--offset", type=int, default=0, help="result offset (default: 0)")


def build_parser() -> argparse.ArgumentParser:
    """Builds the steam-cli argument parser."""
    common = _global_options(suppress=True)

    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Steam CLI for local search, app details and user signals",
        parents=[_global_options(suppress=False)],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    for kind in DictKind:
        dict_parser = commands.add_parser(kind.value, help=f"browse the {kind.value} dictionary")
        dict_parser.set_defaults(kind=kind)
        actions = dict_parser.add_subparsers(dest="action", required=True)

        list_parser = actions.add_parser("list", parents=[common], help=f"list {kind.value} by name")
        _add_paging(list_parser)

        find_parser = actions.add_parser("find", parents=[common], help=f"find {kind.value} by name")
        find_parser.add_argument("query")
        _add_paging(find_parser)

    search = commands.add_parser("search", parents=[common], help="search the store by tag ids")
    search.add_argument("--tags", required=True, help="comma-separated tag ids, e.g. 19,492")
    search.add_argument("--term", default=None, help="optional free-text term")
    _add_paging(search)
    search.add_argument("--with-facets", action="store_true", help="include related tag facets")

    app = commands.add_parser("app", parents=[common], help="show details for an app")
    app.add_argument("appid", type=int)
    app.add_argument(
        "--ttl-sec",
        type=int,
        default=config.DEFAULT_TTL_SEC,
        help=f"cache lifetime in seconds (default: {config.DEFAULT_TTL_SEC})",
    )

    user = commands.add_parser("user", help="per-user data (needs STEAM_API_KEY)")
    user_actions = user.add_subparsers(dest="action", required=True)
    owned = user_actions.add_parser("owned", parents=[common], help="list owned games by playtime")
    owned.add_argument("--steamid", default=None)
    owned.add_argument("--vanity", default=None)
    _add_paging(owned)

    return parser


def _resolve_format(args: argparse.Namespace) -> OutputFormat:
    if args.json:
        return OutputFormat.JSON
    return OutputFormat(args.format)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _store_client() -> SteamStoreClient:
    return SteamStoreClient(language=config.STORE_LANGUAGE, timeout=config.REQUEST_TIMEOUT)


def _handle_dict(args: argparse.Namespace, output_format: OutputFormat, db: Database) -> None:
    kind: DictKind = args.kind
    service = DictionaryService(db, lambda: ensure_seed_snapshot(config.CACHE_DIR))

    if args.action == "list":
        items, pagination = service.list_entries(kind, args.limit, args.offset)
        print_success(
            output_format,
            DictListData(items),
            pagination,
            DataSource.LOCAL_DB,
            False,
            lambda data: _print_dict_list(kind, data.items),
        )
    else:
        items, pagination = service.find_entries(kind, args.query, args.limit, args.offset)
        print_success(
            output_format,
            DictFindData(items),
            pagination,
            DataSource.LOCAL_DB,
            False,
            lambda data: _print_dict_find(kind, args.query, data.items),
        )


def _handle_search(args: argparse.Namespace, output_format: OutputFormat) -> None:
    service = StoreSearchService(_store_client())
    result = service.search(args.tags, args.term, args.limit, args.offset, args.with_facets)
    print_success(output_format, result, result.pagination, DataSource.STEAM_STORE, False, _print_search)


def _handle_app(args: argparse.Namespace, output_format: OutputFormat, db: Database) -> None:
    service = AppDetailService(db, _store_client())
    details, cached = service.get_app(args.appid, args.ttl_sec)
    print_success(
        output_format,
        AppData(details),
        None,
        DataSource.STEAM_STORE,
        cached,
        lambda data: _print_app(data.app),
    )


def _handle_user_owned(args: argparse.Namespace, output_format: OutputFormat) -> None:
    service = OwnedGamesService(
        config.STEAM_API_KEY,
        lambda key: SteamWebAPI(key, timeout=config.REQUEST_TIMEOUT),
    )
    page = service.list_owned(args.steamid, args.vanity, args.limit, args.offset)
    print_success(output_format, page, page.pagination, DataSource.STEAM_WEBAPI, False, _print_owned)


def run(args: argparse.Namespace, output_format: OutputFormat) -> None:
    """Dispatches a parsed command.

    Raises:
        AppError: On any command failure.
    """
    if args.command == "search":
        _handle_search(args, output_format)
        return
    if args.command == "user":
        _handle_user_owned(args, output_format)
        return

    with Database(config.DB_FILE) as db:
        if args.command == "app":
            _handle_app(args, output_format, db)
        else:
            _handle_dict(args, output_format, db)


def main(argv: Sequence[str] | None = None) -> int:
    """Application entry point.

    Returns:
        Process exit code: 0 on success, 1 on any application error.
    """
    args = build_parser().parse_args(argv)
    output_format = _resolve_format(args)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=config.log_file if args.verbose else None,
    )
    logger.debug("steam-cli %s, data dir %s", __version__, config.DATA_DIR)

    try:
        run(args, output_format)
    except AppError as e:
        print_error(output_format, e)
        return 1
    except OSError as e:
        logger.debug("Unexpected I/O failure", exc_info=True)
        print_error(output_format, InternalError(str(e)))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
