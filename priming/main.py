# priming/main.py
"""
Process entry point.

`bootstrap()` wires logging, tracing and the declarative dialog resources
for a host process (the dialog engine embedding this package). The small
command line on top of it prints what a resource primes, which is handy
when authoring `.dialog` files:

    python -m priming.main describe dialogs/main.dialog --locale en-us
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from priming.adapters.declarative import load_dialog_directory, load_dialog_file
from priming.core.domain.dialogs import DialogSet
from priming.core.domain.exceptions import DomainError
from priming.shared.config import settings
from priming.shared.container import container
from priming.shared.logging_config import configure_logging
from priming.shared.observability import setup_observability

logger = structlog.get_logger()


def bootstrap(dialogs_path: Optional[str] = None) -> DialogSet:
    """
    Configures logging and tracing, then loads the dialog resources that
    `BeginDialog` references are resolved against.
    """
    configure_logging()
    setup_observability()

    dialogs = load_dialog_directory(dialogs_path or settings.DIALOGS_PATH)
    logger.info("priming_started", app=settings.APP_NAME, env=settings.APP_ENV.value, dialogs=len(dialogs))
    return dialogs


def describe(path: str, locale: Optional[str], dialogs: DialogSet) -> str:
    dialog = load_dialog_file(path)
    aggregate = container.dialog_describer().describe(dialog, dialogs, locale or settings.DEFAULT_LOCALE)
    return aggregate.model_dump_json(indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Speech priming tools")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    describe_parser = subparsers.add_parser("describe", help="Print what a dialog resource primes")
    describe_parser.add_argument("path", type=str, help="Path to a .dialog resource")
    describe_parser.add_argument("--locale", type=str, default=None, help="Turn locale")
    describe_parser.add_argument("--dialogs", type=str, default=None, help="Directory of referenced dialogs")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    dialogs = bootstrap(args.dialogs or str(Path(args.path).parent))
    try:
        print(describe(args.path, args.locale, dialogs))
    except (DomainError, ValueError, OSError) as e:
        logger.error("priming_describe_failed", path=args.path, error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
