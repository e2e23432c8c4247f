#!/usr/bin/env python3
"""Print the results stored in a saved state document.

Usage
-----
    python scripts/dump_state.py state.json
    python scripts/dump_state.py --object probe1 state.json
    python scripts/dump_state.py --all state.json

Options::

    --object NAME    Only list results of this object
    --all            Also list every property entry
    --json           Output as machine-readable JSON
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pyfostate import StateDictionary, StateDocumentError
from pyfostate._tools.result_dump import format_rows, iter_properties, iter_results


def main() -> int:
    parser = argparse.ArgumentParser(description="List results stored in a state document")
    parser.add_argument("path", help="State document written by StateDictionary.save()")
    parser.add_argument("--object", dest="object_name", help="Only list results of this object")
    parser.add_argument("--all", action="store_true", dest="show_all", help="Also list property entries")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        document = StateDictionary.load(args.path)
    except StateDocumentError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    rows = list(iter_results(document, args.object_name))

    if args.json_mode:
        payload: dict[str, object] = {
            "results": [
                {"path": row.path, "type": row.value_type, "value": row.value} for row in rows
            ],
        }
        if args.show_all:
            payload["properties"] = {path: stored.model_dump(mode="json") for path, stored in iter_properties(document)}
        print(json.dumps(payload, indent=2, default=str))
        return 0

    print(f"== results ({len(rows)})")
    for line in format_rows(rows):
        print(line)

    if args.show_all:
        properties = list(iter_properties(document))
        print(f"\n== properties ({len(properties)})")
        for path, stored in properties:
            print(f"{path}  [{stored.value_type}]  {stored.to_python()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
