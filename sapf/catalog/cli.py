from __future__ import annotations

"""
Command-line catalog generation.

    SAPF_BINARY_PATH=/usr/local/bin/sapf SAPF_PRELUDE_PATH=~/sapf/sapf-prelude.txt \
        sapf-generate-language -o sapf/catalog/language.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from sapf.catalog.generator import generate_catalog
from sapf.catalog.storage import save_language_data
from sapf.config import config_from_env
from sapf.errors import SapfError


def main(argv: Optional[List[str]] = None) -> int:
    cfg = config_from_env()
    parser = argparse.ArgumentParser(description="Generate sapf function definitions from `helpall` output.")
    parser.add_argument("-b", "--binary", default=cfg.binary_path, help="sapf binary (env SAPF_BINARY_PATH)")
    parser.add_argument("-p", "--prelude", default=cfg.prelude_path, help="prelude file (env SAPF_PRELUDE_PATH)")
    parser.add_argument("-o", "--output", default="language.json", help="output JSON file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print(f"Generating language definitions from SAPF binary: {args.binary}")
    if args.prelude:
        print(f"Using prelude file: {args.prelude}")
    else:
        print("No prelude file specified")

    try:
        catalog = generate_catalog(args.binary, args.prelude or None)
        for category, entries in catalog.categories.items():
            print(f"{category}: {len(entries)} functions")
        print(f"Total functions: {catalog.function_count()}")
        path = save_language_data(catalog, args.output)
    except (SapfError, OSError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    print(f"Generated {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
