#!/usr/bin/env python3
"""
Seed the CMS data directory with the default content files.

Existing files are left alone; only missing ones are written.

Usage:
  python scripts/init_data.py [--data-dir ./data]
"""
from __future__ import annotations

import argparse
import os

from parish.core.config import get_settings
from parish.core.logs import configure_logging
from parish.repositories.cms_repository import CMSRepository


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed default CMS content")
    ap.add_argument("--data-dir", help="Directory holding the JSON files (default: DATA_DIR or ./data)")
    args = ap.parse_args()

    if args.data_dir:
        os.environ["DATA_DIR"] = args.data_dir
        get_settings.cache_clear()
    configure_logging()

    seeded = CMSRepository().initialize_default_data()
    print(f"OK: data directory {get_settings().data_dir}")
    if seeded:
        for name in seeded:
            print(f"  seeded {name}")
    else:
        print("  nothing to seed, all files already exist")


if __name__ == "__main__":
    main()
