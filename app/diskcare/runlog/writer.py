"""Run log writer.

Persists one JSON file per command invocation under the logs
directory and refreshes a best-effort ``meta/latest-run.json`` pointer.
"""

import json
import logging
import os
import secrets
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from diskcare.core.errors import LogWriteError
from diskcare.core.paths import get_latest_run_path
from diskcare.runlog.atomic import AtomicWriteError, durable_write
from diskcare.runlog.models import LOG_SCHEMA_VERSION, iso_timestamp
from diskcare.utils.text import error_message

logger = logging.getLogger(__name__)

RUN_LOG_PREFIX = "run-"
RUN_LOG_SUFFIX = ".json"

_MAX_NAME_ATTEMPTS = 5


def serialize_payload(payload: Any, *, timestamp: str | None = None) -> str:
    """Serialize a run log payload to stable JSON.

    Unserializable payloads (non-JSON types, NaN, infinity) are replaced
    by a minimal error record so that a log file is still produced.

    Args:
        payload: Payload to serialize.
        timestamp: Timestamp for the error record (defaults to now).

    Returns:
        JSON text with a trailing newline.
    """
    try:
        text = json.dumps(payload, indent=2, sort_keys=True, allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.warning("Run log payload not serializable: %s", e)
        fallback = {
            "version": LOG_SCHEMA_VERSION,
            "timestamp": timestamp or iso_timestamp(),
            "command": "unknown",
            "error": f"Failed to serialize run log payload: {error_message(e)}",
        }
        text = json.dumps(fallback, indent=2, sort_keys=True)
    return text + "\n"


class RunLogWriter:
    """Writes run logs with collision-free names and atomic publication.

    File names follow ``run-<YYYYMMDDhhmmss>-<pid>-<8 hex>.json`` so they
    sort by time and never collide across processes.

    Args:
        logs_dir: Directory receiving the run logs.
        now_fn: Clock used for the file name (local time).
        pid: Process id embedded in file names.
        token_fn: Source of the 8-hex-character random suffix.
    """

    def __init__(
        self,
        logs_dir: Path,
        *,
        now_fn: Callable[[], datetime] = datetime.now,
        pid: int | None = None,
        token_fn: Callable[[], str] = lambda: secrets.token_hex(4),
    ) -> None:
        self._logs_dir = logs_dir
        self._now_fn = now_fn
        self._pid = pid if pid is not None else os.getpid()
        self._token_fn = token_fn

    @property
    def logs_dir(self) -> Path:
        """Directory receiving the run logs."""
        return self._logs_dir

    @property
    def latest_pointer_path(self) -> Path:
        """Path of the latest-run pointer file."""
        return get_latest_run_path(self._logs_dir)

    def build_file_name(self, token: str) -> str:
        """Build a run log file name for the current time."""
        stamp = self._now_fn().strftime("%Y%m%d%H%M%S")
        return f"{RUN_LOG_PREFIX}{stamp}-{self._pid}-{token}{RUN_LOG_SUFFIX}"

    def write_run_log(self, payload: Any) -> Path:
        """Persist a run log payload.

        Args:
            payload: JSON-serializable run log.

        Returns:
            Path of the published log file.

        Raises:
            LogWriteError: If the logs directory cannot be created or the
                file cannot be written.
        """
        try:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LogWriteError(
                "Failed to create logs directory", {"logsDir": str(self._logs_dir)}
            ) from e

        content = serialize_payload(payload)
        final_path = self._publish(content)

        logger.debug("Wrote run log %s", final_path)
        self._update_latest_pointer(final_path)
        return final_path

    def _publish(self, content: str) -> Path:
        """Publish content under a fresh name, never replacing an existing log."""
        attempt = 0
        while True:
            attempt += 1
            token = self._token_fn()
            final_path = self._logs_dir / self.build_file_name(token)
            try:
                return durable_write(
                    final_path, content, token_fn=lambda t=token: t, exclusive=True
                )
            except AtomicWriteError as e:
                if isinstance(e.__cause__, FileExistsError) and attempt < _MAX_NAME_ATTEMPTS:
                    logger.debug("Run log name %s taken, retrying", final_path.name)
                    continue
                raise LogWriteError(
                    "Failed to write log file",
                    {
                        "logsDir": str(self._logs_dir),
                        "tempPath": str(e.temp_path),
                        "finalPath": str(e.final_path),
                        "attempts": attempt,
                    },
                ) from e

    def _update_latest_pointer(self, log_path: Path) -> None:
        """Refresh meta/latest-run.json. Non-critical, never rethrow."""
        pointer = self.latest_pointer_path
        content = json.dumps(
            {"updatedAt": iso_timestamp(), "logFile": log_path.name}, indent=2
        ) + "\n"

        try:
            pointer.parent.mkdir(parents=True, exist_ok=True)
            try:
                durable_write(pointer, content, token_fn=self._token_fn)
            except AtomicWriteError as e:
                if not isinstance(e.__cause__, (FileExistsError, PermissionError)):
                    raise
                pointer.unlink(missing_ok=True)
                durable_write(pointer, content, token_fn=self._token_fn)
        except OSError as e:
            logger.debug("Latest-run pointer not updated: %s", e)
