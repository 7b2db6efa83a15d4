"""
Gutenberg RDF -> Fuseki bulk loader

Streams every RDF/XML record out of rdf-files.tar.zip and writes it into
the configured named graph:
1. Check the one-shot trigger marker (first start only creates it)
2. Open the zip, locate the inner .tar, sweep its entries
3. PUT (replace) or POST (append) each document to the graph store
4. Print a summary and exit with 0 (done) or 1 (failed)
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from core.config import load_settings
from core.logging_config import configure_logging
from domain.enums import WriteMode
from domain.models import RunResult
from pipeline.loader_pipeline import GraphLoaderPipeline
from repositories.archive_repo import RdfArchiveRepository
from repositories.graph_store_repo import GraphStoreRepository
from services.trigger_service import OneShotTrigger

EXIT_OK = 0
EXIT_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load Project Gutenberg RDF metadata from rdf-files.tar.zip into a Fuseki graph."
    )
    parser.add_argument("--archive", type=str, help="Path to rdf-files.tar.zip (default: RDF_ARCHIVE_PATH)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in WriteMode],
        help="replace = PUT per document, append = POST per document (default: WRITE_MODE)",
    )
    parser.add_argument(
        "--max-documents",
        type=int,
        help="Stop after this many documents (default: MAX_DOCUMENTS, unset = whole corpus)",
    )
    parser.add_argument("--preview", type=int, default=0, help="Log the first N characters of each document")
    parser.add_argument("--marker", type=str, help="Trigger marker path (default: TRIGGER_MARKER_PATH)")
    parser.add_argument("--no-trigger", action="store_true", help="Skip the one-shot trigger and load now")
    return parser


def print_summary(result: RunResult) -> None:
    c = result.counters
    print("=" * 60)
    print(f"State          : {result.state.value}")
    if result.message:
        print(f"Message        : {result.message}")
    print(f"Documents      : {c.documents_processed}")
    print(f"  sent OK      : {c.successful_sends}")
    print(f"  send failed  : {c.failed_sends}")
    print(f"  undecodable  : {c.decode_failures}")
    print(f"Skipped records: {c.skipped_entries}")
    print(f"Total bytes    : {c.total_bytes}")
    print(f"Elapsed        : {c.elapsed_seconds:.2f}s")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"[ERROR] Invalid configuration: {e.error_count()} setting(s) rejected\n{e}")
        return EXIT_FAILED
    configure_logging(settings.LOG_LEVEL)

    if args.max_documents is not None and args.max_documents <= 0:
        parser.error("--max-documents must be a positive integer")

    use_trigger = settings.USE_TRIGGER and not args.no_trigger
    if use_trigger:
        trigger = OneShotTrigger(args.marker or settings.TRIGGER_MARKER_PATH)
        try:
            should_run = trigger.should_run()
        except OSError as e:
            print(f"[ERROR] Cannot create trigger marker {trigger.marker_path}: {e}")
            return EXIT_FAILED
        if not should_run:
            print(f"[INFO] First start: created {trigger.marker_path}; load runs on the next start.")
            return EXIT_OK

    archive_path = args.archive or settings.RDF_ARCHIVE_PATH
    write_mode = WriteMode(args.mode) if args.mode else settings.WRITE_MODE
    max_documents = args.max_documents if args.max_documents is not None else settings.MAX_DOCUMENTS

    print(f"[INFO] Archive : {archive_path}")
    print(f"[INFO] Endpoint: {settings.FUSEKI_DATA_URL} ({write_mode.value})")
    if max_documents:
        print(f"[INFO] Bounded run: at most {max_documents} documents")

    archive = RdfArchiveRepository(archive_path, inner_suffix=settings.INNER_ARCHIVE_SUFFIX)
    with GraphStoreRepository(settings.graph_store_config()) as store:
        pipeline = GraphLoaderPipeline(
            archive=archive,
            store=store,
            write_mode=write_mode,
            max_documents=max_documents,
            preview_chars=args.preview,
        )
        result = pipeline.run()

    print_summary(result)

    if not result.ok:
        print(f"[ERROR] Load failed: {result.message}")
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
