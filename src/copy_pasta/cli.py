"""copy-pasta command line.

    echo hello | copy-pasta          # copy stdin to the current target
    copy-pasta paste                 # print what was copied
    copy-pasta login --target work   # register a target and make it current
    copy-pasta target home           # switch the current target
    copy-pasta targets               # list known targets
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from copy_pasta.config.object_store_config import DEFAULT_REGION, ObjectStoreConfig
from copy_pasta.errors import ConfigError
from copy_pasta.logging_config import configure_logging, get_logger
from copy_pasta.runcommands import rc as runcommands
from copy_pasta.runcommands.models import RunCommands, Target
from copy_pasta.storage.object_store import ObjectStoreClient, S3ObjectStore
from copy_pasta.storage.s3 import s3_read, s3_write

OBJECT_NAME = "default-object-name"
BUCKET_SUFFIX = "-copy-pasta"

EXIT_OK = 0
EXIT_RC_UNAVAILABLE = 1
EXIT_UPDATE_FAILED = 2
EXIT_UNKNOWN_TARGET = 3
EXIT_NO_TARGET = 4
EXIT_STORE_FAILED = 5
EXIT_LOGIN_ABORTED = 6

logger = get_logger(__name__)


def _region() -> str:
    return os.getenv("COPY_PASTA_S3_REGION") or DEFAULT_REGION


def make_client(target: Target) -> ObjectStoreClient:
    config = ObjectStoreConfig.from_target(
        target,
        endpoint=os.getenv("COPY_PASTA_S3_ENDPOINT"),
        region=_region(),
    )
    return S3ObjectStore(config)


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _load(rc_path: Path) -> RunCommands | None:
    try:
        return runcommands.load(rc_path)
    except ConfigError as exc:
        logger.debug("Could not load rc file: path=%s", rc_path, exc_info=True)
        _error(f"{exc}. Run 'copy-pasta login --target <name>' first.")
        return None


def _resolve_target(rc_path: Path, name: str | None) -> tuple[Target | None, int]:
    config = _load(rc_path)
    if config is None:
        return None, EXIT_RC_UNAVAILABLE
    target = config.resolve(name)
    if target is None:
        if name is None:
            _error("No current target, run 'copy-pasta login --target <name>' first.")
            return None, EXIT_RC_UNAVAILABLE
        _error(f"Target is invalid: {name}")
        return None, EXIT_UNKNOWN_TARGET
    return target, EXIT_OK


def _copy(args: argparse.Namespace, rc_path: Path) -> int:
    target, code = _resolve_target(rc_path, args.target)
    if target is None:
        return code
    logger.info("Copying clipboard", extra={"target": target.name, "bucket": target.bucket_name})
    try:
        s3_write(make_client(target), target.bucket_name, OBJECT_NAME, _region(), sys.stdin.buffer)
    except (BotoCoreError, ClientError) as exc:
        logger.debug("Copy failed: target=%s", target.name, exc_info=True)
        _error(f"Failed to copy to target {target.name}: {exc}")
        return EXIT_STORE_FAILED
    return EXIT_OK


def _paste(args: argparse.Namespace, rc_path: Path) -> int:
    target, code = _resolve_target(rc_path, args.target)
    if target is None:
        return code
    logger.info("Pasting clipboard", extra={"target": target.name, "bucket": target.bucket_name})
    try:
        content = s3_read(make_client(target), target.bucket_name, OBJECT_NAME)
    except (BotoCoreError, ClientError) as exc:
        logger.debug("Paste failed: target=%s", target.name, exc_info=True)
        _error(f"Failed to paste from target {target.name}: {exc}")
        return EXIT_STORE_FAILED
    except UnicodeDecodeError as exc:
        _error(f"Content of target {target.name} is not UTF-8 text: {exc}")
        return EXIT_STORE_FAILED
    sys.stdout.write(content)
    sys.stdout.flush()
    return EXIT_OK


def _login(args: argparse.Namespace, rc_path: Path) -> int:
    try:
        access_key = input("Please enter key ID: ").strip()
        secret_access_key = getpass.getpass("Please enter secret access key: ").strip()
    except (EOFError, KeyboardInterrupt):
        _error("\nLogin aborted, no credentials were saved.")
        return EXIT_LOGIN_ABORTED
    bucket_name = args.bucket or f"{args.target}{BUCKET_SUFFIX}"
    try:
        runcommands.update(rc_path, args.target, access_key, secret_access_key, bucket_name)
    except ConfigError as exc:
        _error(f"Failed to update the current target: {exc}")
        return EXIT_UPDATE_FAILED
    print(f"Logged in to target {args.target} (bucket {bucket_name})", file=sys.stderr)
    return EXIT_OK


def _target(args: argparse.Namespace, rc_path: Path) -> int:
    if not args.name:
        _error("No target provided")
        return EXIT_NO_TARGET
    config = _load(rc_path)
    if config is None:
        return EXIT_RC_UNAVAILABLE
    target = config.targets.get(args.name)
    if target is None:
        _error("Target is invalid")
        return EXIT_UNKNOWN_TARGET
    try:
        runcommands.update(rc_path, target.name, target.access_key, target.secret_access_key, target.bucket_name)
    except ConfigError as exc:
        _error(f"Failed to update the current target: {exc}")
        return EXIT_UPDATE_FAILED
    return EXIT_OK


def _targets(args: argparse.Namespace, rc_path: Path) -> int:
    config = _load(rc_path)
    if config is None:
        return EXIT_RC_UNAVAILABLE
    current = config.current_target.name if config.current_target else None
    for name in sorted(config.targets):
        marker = "*" if name == current else " "
        print(f"{marker} {name} ({config.targets[name].bucket_name})")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copy-pasta",
        description="Share a clipboard between machines through an S3-compatible object store.",
    )
    parser.add_argument(
        "--rc-file",
        type=Path,
        default=None,
        help="Path to the targets file (default: ~/.copy-pastarc).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: $LOG_LEVEL or WARNING).",
    )
    parser.set_defaults(handler=_copy, target=None)
    subparsers = parser.add_subparsers(dest="command")

    copy_parser = subparsers.add_parser("copy", help="Copy stdin to the target (default command).")
    copy_parser.add_argument("--target", help="Target to copy to (default: current target).")
    copy_parser.set_defaults(handler=_copy)

    paste_parser = subparsers.add_parser("paste", help="Print the content of the target.")
    paste_parser.add_argument("--target", help="Target to paste from (default: current target).")
    paste_parser.set_defaults(handler=_paste)

    login_parser = subparsers.add_parser("login", help="Register a target and make it the current one.")
    login_parser.add_argument("--target", required=True, help="Name of the target.")
    login_parser.add_argument("--bucket", help=f"Bucket name (default: <target>{BUCKET_SUFFIX}).")
    login_parser.set_defaults(handler=_login)

    target_parser = subparsers.add_parser("target", help="Changes the current target to the provided target.")
    target_parser.add_argument("name", nargs="?", help="Name of an existing target.")
    target_parser.set_defaults(handler=_target)

    targets_parser = subparsers.add_parser("targets", help="List the known targets.")
    targets_parser.set_defaults(handler=_targets)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)
    rc_path = args.rc_file or runcommands.default_rc_path()
    return args.handler(args, rc_path)


if __name__ == "__main__":
    sys.exit(main())
