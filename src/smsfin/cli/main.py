#!/usr/bin/env python3
"""
smsfin CLI - parse bank SMS alerts from the command line.

Usage:
    smsfin parse "HDFC Bank: INR 1,250.00 has been debited from A/c XX1234 ..."
    echo "SBI: Rs.500 debited ..." | smsfin parse
    smsfin classify "SWIGGY ORDER"
    smsfin import inbox.csv --output transactions.xlsx
    smsfin samples
"""

import argparse
import json
import logging
import sys
from typing import Any

from smsfin.core.config import ParserConfig, load_config
from smsfin.core.exceptions import SMSFinError
from smsfin.parsers.sms.ingester import export_transactions
from smsfin.parsers.sms.samples import SAMPLE_SMS_MESSAGES

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _print_json(data: Any):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_parse(args, config: ParserConfig) -> int:
    """Handle parse command - parse one SMS body."""
    text = args.text if args.text is not None else sys.stdin.read()

    txn = config.build_parser().parse(text)
    if txn is None:
        print("No transaction found in SMS", file=sys.stderr)
        return 1

    _print_json(txn.to_dict())
    return 0


def cmd_classify(args, config: ParserConfig) -> int:
    """Handle classify command - categorize a merchant name."""
    result = config.build_classifier().classify(args.merchant)
    _print_json(result.to_dict())
    return 0


def cmd_import(args, config: ParserConfig) -> int:
    """Handle import command - batch-parse an SMS export file."""
    ingester = config.build_ingester()
    if args.all_senders:
        ingester.sender_filters = None

    result = ingester.ingest_file(args.file)

    summary = {
        "source_file": result.source_file,
        "total_messages": result.total_messages,
        "transactions": result.transaction_count,
        "skipped_senders": result.skipped_senders,
        "unparsed": result.unparsed,
    }

    if args.output:
        summary["output"] = str(export_transactions(result, args.output))
    else:
        summary["records"] = [t.transaction.to_dict() for t in result.transactions]

    _print_json(summary)
    return 0


def cmd_samples(args, config: ParserConfig) -> int:
    """Handle samples command - parse the built-in reference messages."""
    parser = config.build_parser()
    output = []
    for sample in SAMPLE_SMS_MESSAGES:
        txn = parser.parse(sample["message"])
        output.append({
            "id": sample["id"],
            "sender": sample["sender"],
            "transaction": txn.to_dict() if txn else None,
        })
    _print_json(output)
    return 0


COMMANDS = {
    "parse": cmd_parse,
    "classify": cmd_classify,
    "import": cmd_import,
    "samples": cmd_samples,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smsfin",
        description="smsfin - offline bank SMS transaction parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  smsfin parse "Kotak: INR 3,999.00 debited from your A/c XX7890 for purchase at MYNTRA."
  smsfin classify "BIGBASKET"
  smsfin import sms_backup.csv --output transactions.xlsx
  smsfin --config smsfin.json samples
        """
    )

    # Global arguments
    parser.add_argument("--config", "-c", help="Parser config JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Command")

    parse_parser = subparsers.add_parser("parse", help="Parse one SMS body")
    parse_parser.add_argument("text", nargs="?", help="SMS text (read from stdin if omitted)")

    classify_parser = subparsers.add_parser("classify", help="Categorize a merchant name")
    classify_parser.add_argument("merchant", help="Merchant name")

    import_parser = subparsers.add_parser("import", help="Parse an SMS export (CSV/Excel)")
    import_parser.add_argument("file", help="SMS export with sender/body columns")
    import_parser.add_argument("--output", "-o", help="Write transactions to .xlsx or .csv")
    import_parser.add_argument("--all-senders", action="store_true",
                               help="Parse messages from every sender, not only banks")

    subparsers.add_parser("samples", help="Parse the built-in sample messages")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    try:
        config = load_config(args.config)
        return COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation cancelled", file=sys.stderr)
        return 130
    except SMSFinError as e:
        logger.debug(f"{type(e).__name__} [{e.code}]", exc_info=args.debug)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
