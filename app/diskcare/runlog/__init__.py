"""Run log persistence."""

from diskcare.runlog.atomic import AtomicWriteError, durable_write
from diskcare.runlog.models import LOG_SCHEMA_VERSION, build_clean_log, build_scan_log
from diskcare.runlog.writer import RunLogWriter, serialize_payload

__all__ = [
    "LOG_SCHEMA_VERSION",
    "AtomicWriteError",
    "RunLogWriter",
    "build_clean_log",
    "build_scan_log",
    "durable_write",
    "serialize_payload",
]
