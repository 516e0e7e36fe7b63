"""Command line front end: seal JSON files into envelopes and open them again.

Examples::

    encdoc seal notes.json -o notes.enc.json          # prompts for a password
    encdoc seal notes.json --plaintext                # tagged, not encrypted
    ENCDOC_PASSWORD=hunter2 encdoc open notes.enc.json
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from encdoc.config import Settings, load_settings
from encdoc.core.exceptions import EncDocError
from encdoc.core.models import PLAINTEXT, SECRETBOX, EncryptedDocument, EncryptedOptions, SecretOptions
from encdoc.envelope import decrypted, encrypted
from encdoc.cli.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="encdoc",
        description="Store JSON documents in self-describing encrypted envelopes.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $ENCDOC_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seal = sub.add_parser("seal", help="Wrap a JSON document in an envelope")
    seal.add_argument("input", help="JSON file to read, or - for stdin")
    seal.add_argument("-o", "--output", default="-", help="Where to write the envelope (default: stdout)")
    seal.add_argument(
        "--plaintext",
        action="store_true",
        help="Store the data unencrypted, tagged as plaintext",
    )
    seal.add_argument("--salt", default=None, help="Salt to use instead of a random one")
    _add_secret_arguments(seal)

    open_ = sub.add_parser("open", help="Recover the JSON document held by an envelope")
    open_.add_argument("input", help="Envelope file to read, or - for stdin")
    open_.add_argument("-o", "--output", default="-", help="Where to write the data (default: stdout)")
    _add_secret_arguments(open_)
    return parser


def _add_secret_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--password", default=None, help="Password (default: $ENCDOC_PASSWORD or prompt)")
    group.add_argument(
        "--key",
        default=None,
        help="Raw key; its UTF-8 bytes are used directly and must be exactly 32 bytes",
    )


def _read_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json(obj: Any, path: str) -> None:
    text = json.dumps(obj, indent=2, ensure_ascii=False)
    if path == "-":
        sys.stdout.write(text + "\n")
        return
    with open(Path(path), "w", encoding="utf-8") as f:
        f.write(text + "\n")


def _secret_options(args: argparse.Namespace, settings: Settings) -> SecretOptions:
    if args.key:
        return SecretOptions(key=args.key)
    password = args.password or settings.password or getpass.getpass("Password: ")
    return SecretOptions(password=password)


def _cmd_seal(args: argparse.Namespace, settings: Settings) -> None:
    data = _read_json(args.input)
    if args.plaintext:
        opts = EncryptedOptions(type=PLAINTEXT, salt=args.salt)
    else:
        secret = _secret_options(args, settings)
        opts = EncryptedOptions(
            type=SECRETBOX,
            password=secret.password,
            key=secret.key,
            salt=args.salt,
        )
    result = encrypted(data, opts)
    logger.info("sealed %s with salt %s", args.input, result.salt)
    _write_json(result.document.to_dict(), args.output)


def _cmd_open(args: argparse.Namespace, settings: Settings) -> None:
    document = EncryptedDocument.from_dict(_read_json(args.input))
    # plaintext envelopes never prompt for a password
    opts = _secret_options(args, settings) if document.is_encrypted else None
    _write_json(decrypted(document, opts), args.output)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    settings = load_settings()

    level = settings.log_level
    if args.log_level:
        level = logging.getLevelName(args.log_level.upper())
        if not isinstance(level, int):
            parser.error(f"unknown log level: {args.log_level}")
    configure_logging(level)

    try:
        if args.command == "seal":
            _cmd_seal(args, settings)
        else:
            _cmd_open(args, settings)
    except EncDocError as exc:
        logger.debug("command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        # unreadable file or input that is not JSON
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
