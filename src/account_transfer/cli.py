"""
Command Line Interface
======================

    account-transfer import scans.txt
    account-transfer export --user-id U --fingerprint F --key-file key.asc \\
        --domain https://example.com --transfer-id T --token K

``import`` reads one scanned string per line, in capture order, the way a
camera loop would hand them over: out-of-order and repeated scans are
skipped, fatal errors stop the transfer.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from account_transfer.config import ExportConfig, load_config, setup_logging
from account_transfer.errors import TransferError
from account_transfer.models.account import AccountRecord
from account_transfer.transfer.exporter import build_transfer_frames
from account_transfer.transfer.session import AccountTransferSession


logger = logging.getLogger(__name__)


def _chunk_size(value: str) -> int:
    """argparse type for --chunk-size, bounded like export.chunk_size."""
    try:
        return ExportConfig(chunk_size=int(value)).chunk_size
    except ValueError:
        # pydantic.ValidationError is a ValueError
        raise argparse.ArgumentTypeError(f"chunk size must be an integer in 16..4096, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="account-transfer",
        description="Offline QR account transfer",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--log-level", help="Override logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Reassemble an account from scanned frames")
    import_parser.add_argument("scans", help="File with one scanned QR string per line")

    export_parser = subparsers.add_parser("export", help="Print the frames of an account transfer")
    export_parser.add_argument("--user-id", required=True)
    export_parser.add_argument("--fingerprint", required=True)
    export_parser.add_argument("--key-file", required=True, help="Armored private key file")
    export_parser.add_argument("--domain", required=True)
    export_parser.add_argument("--transfer-id", required=True)
    export_parser.add_argument("--token", required=True, help="One-time authentication token")
    export_parser.add_argument("--chunk-size", type=_chunk_size, help="Payload bytes per frame")

    return parser


def run_import(args: argparse.Namespace, settings) -> int:
    session = AccountTransferSession(
        supported_versions=settings.transfer.supported_versions,
        require_https_domain=settings.transfer.require_https_domain,
    )

    with open(args.scans, "r", encoding="utf-8") as f:
        lines = [line.rstrip("\r\n") for line in f]

    for number, line in enumerate(lines, start=1):
        if not line:
            continue
        try:
            session.process_payload(line)
        except TransferError as e:
            if e.recoverable:
                logger.info(f"Skipping line {number}: {e.code.value}")
                continue
            print(f"Transfer failed: {e.message}", file=sys.stderr)
            return 1
        if session.account is not None:
            break

    if session.account is None:
        print(
            f"Transfer incomplete, missing page {session.expected_next_page}",
            file=sys.stderr,
        )
        return 1

    configuration = session.configuration
    print(json.dumps({
        "user_id": session.account.user_id,
        "fingerprint": session.account.fingerprint,
        "domain": configuration.domain,
        "transfer_id": configuration.transfer_id,
    }))
    return 0


def run_export(args: argparse.Namespace, settings) -> int:
    with open(args.key_file, "r", encoding="utf-8") as f:
        armored_key = f.read()

    account = AccountRecord(
        user_id=args.user_id,
        fingerprint=args.fingerprint,
        armored_key=armored_key,
    )
    frames = build_transfer_frames(
        account,
        transfer_id=args.transfer_id,
        authentication_token=args.token,
        domain=args.domain,
        chunk_size=args.chunk_size or settings.export.chunk_size,
        version=settings.export.version,
    )
    for frame in frames:
        print(frame)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_config(args.config)
    if args.log_level:
        settings.logging.level = args.log_level
    setup_logging(settings)

    if args.command == "import":
        return run_import(args, settings)
    return run_export(args, settings)


if __name__ == "__main__":
    sys.exit(main())
