"""Load and update the copy-pasta rc file (~/.copy-pastarc).

The rc file is the only state kept between runs. Every ``load`` reads it
fresh; every ``update`` rewrites it completely through a temporary file in the
same directory followed by an atomic rename.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import yaml
from pydantic import ValidationError

from copy_pasta.errors import ConfigNotFoundError, ConfigParseError, ConfigWriteError
from copy_pasta.logging_config import get_logger
from copy_pasta.runcommands.models import RunCommands, Target

RC_FILE_NAME = ".copy-pastarc"

logger = get_logger(__name__)


def default_rc_path() -> Path:
    return Path.home() / RC_FILE_NAME


def load(path: Path) -> RunCommands:
    """Read the rc file at ``path``.

    Raises ConfigNotFoundError when the file does not exist and
    ConfigParseError when it is not YAML or does not match the rc schema.
    The current target is returned as written, even if it disagrees with
    the entry of the same name in ``targets``.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(path) from exc

    try:
        raw = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError(path, f"not valid UTF-8 text: {exc}") from exc

    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigParseError(path, str(exc)) from exc

    if document is None:
        document = {}
    try:
        rc = RunCommands.model_validate(document)
    except ValidationError as exc:
        raise ConfigParseError(path, str(exc)) from exc

    logger.debug("Loaded rc file: path=%s targets=%s", path, len(rc.targets))
    return rc


def _load_or_empty(path: Path) -> RunCommands:
    try:
        return load(path)
    except ConfigNotFoundError:
        logger.info("No rc file yet, starting empty: path=%s", path)
    except ConfigParseError:
        logger.warning("Ignoring unreadable rc file and starting empty: path=%s", path, exc_info=True)
    return RunCommands()


def _write_atomically(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates the file 0600, which is what a credentials file needs
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def update(path: Path, name: str, access_key: str, secret_access_key: str, bucket_name: str) -> RunCommands:
    """Add or replace target ``name`` and make it the current target.

    A missing or corrupted rc file is not an error here: the new target is
    written into a fresh rc file instead. Only a failure to write the new
    file raises (ConfigWriteError).
    """
    path = Path(path)
    target = Target(
        name=name,
        access_key=access_key,
        secret_access_key=secret_access_key,
        bucket_name=bucket_name,
    )
    rc = _load_or_empty(path).with_target(target)
    content = yaml.safe_dump(rc.to_document(), default_flow_style=False, sort_keys=False)

    try:
        _write_atomically(path, content)
    except OSError as exc:
        raise ConfigWriteError(path, str(exc)) from exc

    logger.info("Updated rc file: path=%s current_target=%s targets=%s", path, name, len(rc.targets))
    return rc
