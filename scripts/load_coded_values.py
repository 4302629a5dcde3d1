from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from item_groups.ingest.pipeline import QuestionnairePipeline
from item_groups.logging_config import configure_logging
from item_groups.storage import SQLiteCodedValueConfig, SQLiteCodedValueStore


logger = logging.getLogger("load_coded_values")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Load and inspect questionnaire coded values.")
    parser.add_argument(
        "--sqlite-db",
        type=Path,
        default=Path(os.getenv("SQLITE_DB", "artifacts/item_groups.db")),
        help="Path to the SQLite store (default: $SQLITE_DB or artifacts/item_groups.db)",
    )
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    load = subparsers.add_parser("load", help="Append coded values from a text file (one per line)")
    load.add_argument("guid", help="Client document GUID")
    load.add_argument("source", type=Path, help="Text file with one LinkID^Question value per line")
    load.add_argument("--name", help="Optional display name for the document")

    show = subparsers.add_parser("show", help="Print the grouped questionnaire as JSON")
    show.add_argument("guid", help="Client document GUID")
    show.add_argument("--stats", action="store_true", help="Also print assembly counts")
    show.add_argument(
        "--max-depth",
        type=int,
        default=int(os.getenv("MAX_DEPTH", "100")),
        help="Refuse questionnaires nested deeper than this (default: $MAX_DEPTH or 100; <= 0 disables)",
    )

    delete = subparsers.add_parser("delete", help="Remove a document and its coded values")
    delete.add_argument("guid", help="Client document GUID")
    return parser.parse_args(argv)


def read_values(source: Path) -> List[str]:
    lines = source.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


class QuestionnaireTooDeep(ValueError):
    pass


def render_questionnaire(
    store: SQLiteCodedValueStore,
    guid: str,
    *,
    with_stats: bool = False,
    max_depth: Optional[int] = None,
) -> Optional[dict]:
    coded_values = store.get_coded_values(guid)
    if not coded_values:
        return None
    result = QuestionnairePipeline().run(coded_values)
    stats = result.stats
    if max_depth is not None and stats.max_nesting > max_depth:
        raise QuestionnaireTooDeep(f"Questionnaire nests {stats.max_nesting} levels; the limit is {max_depth}.")
    payload = result.to_dict()
    if with_stats:
        return {
            "groups": payload,
            "stats": {
                "nodes": stats.nodes,
                "roots": stats.roots,
                "attached": stats.attached,
                "unmatched": stats.unmatched,
                "cycles_skipped": stats.cycles_skipped,
                "dropped": stats.dropped,
                "max_nesting": stats.max_nesting,
            },
        }
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    store = SQLiteCodedValueStore(SQLiteCodedValueConfig(db_path=args.sqlite_db))
    store.initialize()
    try:
        if args.command == "load":
            if not args.source.exists():
                raise FileNotFoundError(f"Source file not found: {args.source}")
            written = store.add_coded_values(args.guid, read_values(args.source), name=args.name)
            logger.info("Loaded %s coded values for %s into %s", written, args.guid, args.sqlite_db)
            return 0

        if args.command == "show":
            max_depth = args.max_depth if args.max_depth > 0 else None
            try:
                payload = render_questionnaire(store, args.guid, with_stats=args.stats, max_depth=max_depth)
            except QuestionnaireTooDeep as exc:
                logger.error("%s: %s", args.guid, exc)
                return 1
            if payload is None:
                logger.error("Resource Not Found: %s", args.guid)
                return 1
            print(json.dumps(payload, indent=2))
            return 0

        if not store.delete_document(args.guid):
            logger.error("Resource Not Found: %s", args.guid)
            return 1
        logger.info("Deleted %s", args.guid)
        return 0
    finally:
        store.close()


if __name__ == "__main__":
    raise SystemExit(main())
