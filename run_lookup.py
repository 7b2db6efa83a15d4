# USAGE: python run_lookup.py --id 1 [--archive Resources/rdf-files.tar.zip]

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from core.config import load_settings
from core.logging_config import configure_logging
from domain.errors import ArchiveNotFoundError, ArchiveReadError, DocumentDecodeError, NoInnerArchiveError
from repositories.archive_repo import RdfArchiveRepository
from services.lookup_service import RdfLookupService

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_FOUND = 3


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the RDF metadata record of one Project Gutenberg ebook."
    )
    parser.add_argument("--id", type=int, default=1, help="Ebook id (looks up cache/epub/{id}/pg{id}.rdf)")
    parser.add_argument("--archive", type=str, help="Path to rdf-files.tar.zip (default: RDF_ARCHIVE_PATH)")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as e:
        print(f"[ERROR] Invalid configuration: {e.error_count()} setting(s) rejected\n{e}")
        return EXIT_FAILED
    configure_logging(settings.LOG_LEVEL)

    archive = RdfArchiveRepository(
        args.archive or settings.RDF_ARCHIVE_PATH,
        inner_suffix=settings.INNER_ARCHIVE_SUFFIX,
    )
    service = RdfLookupService(archive)

    try:
        rdf_content = service.get_rdf_content(args.id)
    except NoInnerArchiveError:
        print(f"No {settings.INNER_ARCHIVE_SUFFIX} file found in the ZIP archive.")
        return EXIT_NOT_FOUND
    except ArchiveNotFoundError as e:
        print(f"[ERROR] {e}")
        return EXIT_NOT_FOUND
    except (ArchiveReadError, DocumentDecodeError) as e:
        print(f"[ERROR] Lookup failed: {e}")
        return EXIT_FAILED

    if rdf_content is None:
        print("Item not found.")
        return EXIT_NOT_FOUND

    print(f"RDF Content for Item {args.id}:\n" + rdf_content)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
