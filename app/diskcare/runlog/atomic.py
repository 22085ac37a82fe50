"""Durable file publication.

Content is written to a uniquely named temporary file next to the
destination, flushed to disk, and then published. Readers only ever
see the old file or the complete new one.

Publishing either renames over the destination or, in exclusive mode,
hard-links the temporary file to a name that must not exist yet.
"""

import logging
import os
import secrets
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class AtomicWriteError(OSError):
    """Raised when the temporary write or the rename fails.

    Attributes:
        temp_path: Temporary file that was being written.
        final_path: Destination path.
    """

    def __init__(self, message: str, temp_path: Path, final_path: Path) -> None:
        super().__init__(message)
        self.temp_path = temp_path
        self.final_path = final_path


def temp_path_for(final_path: Path, token: str) -> Path:
    """Build the temporary sibling used while publishing ``final_path``."""
    return final_path.with_name(f"{final_path.name}.{os.getpid()}.{token}.tmp")


def durable_write(
    final_path: Path,
    content: str,
    *,
    token_fn: Callable[[], str] = lambda: secrets.token_hex(4),
    exclusive: bool = False,
) -> Path:
    """Atomically publish text content at ``final_path``.

    The temporary file is created exclusively (mode ``"x"``), so two
    writers can never share one. Any failure removes the temporary file
    and leaves ``final_path`` untouched. With ``exclusive`` an existing
    ``final_path`` is never replaced: publication fails with
    FileExistsError as the cause.

    Args:
        final_path: Destination path. Its directory must exist.
        content: Text to write (UTF-8).
        token_fn: Source of the random temp-file suffix.
        exclusive: Refuse to publish over an existing file.

    Returns:
        The final path.

    Raises:
        AtomicWriteError: If writing, syncing, or renaming fails. The
            original OSError is chained as the cause.
    """
    tmp_path = temp_path_for(final_path, token_fn())
    try:
        f = open(tmp_path, "x", encoding="utf-8")  # noqa: SIM115
    except OSError as e:
        # Not ours to clean up: the name may belong to another writer
        raise AtomicWriteError(f"Atomic write failed: {e}", tmp_path, final_path) from e

    try:
        with f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if exclusive:
            os.link(tmp_path, final_path)
            _remove_quietly(tmp_path)
        else:
            os.replace(tmp_path, final_path)
    except OSError as e:
        _remove_quietly(tmp_path)
        raise AtomicWriteError(f"Atomic write failed: {e}", tmp_path, final_path) from e

    return final_path


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug("Could not remove temp file %s: %s", path, e)
