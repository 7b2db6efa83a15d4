# USAGE:
#   python run_sparql.py update "INSERT DATA { <urn:a> <urn:b> <urn:c> }"
#   python run_sparql.py query --file query.rq

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from core.config import load_settings
from core.logging_config import configure_logging
from repositories.graph_store_repo import GraphStoreRepository

EXIT_OK = 0
EXIT_FAILED = 1

DEFAULT_QUERY = "SELECT ?s ?p ?o WHERE { ?s ?p ?o } LIMIT 10"


def _read_text(args: argparse.Namespace) -> str:
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    return args.text


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Submit a SPARQL Update or Query to the Fuseki endpoints (smoke test)."
    )
    sub = parser.add_subparsers(dest="command", required=True)
    for name, default in (("update", None), ("query", DEFAULT_QUERY)):
        p = sub.add_parser(name, help=f"POST application/sparql-{name}")
        p.add_argument("text", nargs="?", default=default, help=f"SPARQL {name} text")
        p.add_argument("--file", type=str, help="Read the SPARQL text from this file")

    args = parser.parse_args(argv)
    if not args.file and not args.text:
        parser.error(f"{args.command}: give the SPARQL text or --file")

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"[ERROR] Invalid configuration: {e.error_count()} setting(s) rejected\n{e}")
        return EXIT_FAILED
    configure_logging(settings.LOG_LEVEL)
    sparql = _read_text(args)

    with GraphStoreRepository(settings.graph_store_config()) as store:
        if args.command == "update":
            ok = store.update(sparql)
            print("[OK] Update applied." if ok else "[ERROR] Update failed.")
            return EXIT_OK if ok else EXIT_FAILED

        result = store.query(sparql)
        if result is None:
            print("[ERROR] Query failed.")
            return EXIT_FAILED
        print(result)
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
