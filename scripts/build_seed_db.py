#!/usr/bin/env python3
"""
Build the bundled dictionary snapshot (steam_cli/resources/steam.db)
from the JSON assets next to it.

Usage: python scripts/build_seed_db.py [OUTPUT_PATH]
"""

import sys
from pathlib import Path

from steam_cli.core.errors import AppError
from steam_cli.core.seed_builder import BUNDLED_SNAPSHOT_NAME, build_seed_database
from steam_cli.utils.paths import get_resources_dir


def main():
    """Build the snapshot and report row counts."""
    resources_dir = get_resources_dir()
    out_path = Path(sys.argv[1]) if len(sys.argv) > 1 else resources_dir / BUNDLED_SNAPSHOT_NAME

    try:
        counts = build_seed_database(out_path, resources_dir)
    except (AppError, OSError, ValueError) as e:
        print(f"Seed build failed: {e}", file=sys.stderr)
        return 1

    summary = ", ".join(f"{kind.value}={count}" for kind, count in counts.items())
    print(f"seeded {out_path} ({summary})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
