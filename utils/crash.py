"""Crash reporting for the ksuid command."""

import json
import os
import sys
import traceback

from core.generator import new_ksuid

# Overridden from config.logging.crash_file by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    """Set the crash log path."""
    global _crash_log
    _crash_log = crash_file


def _append_record(record):
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record) + "\n")
    except OSError:
        pass


def crash_record(exc_type, exc_value, exc_tb, argv=None):
    """
    JSON-ready description of an unhandled exception.

    The record is keyed by a fresh KSUID, so crash files sort by time and the
    id alone says when the crash happened ("time" is that KSUID's timestamp).
    """
    crash_id = new_ksuid()
    return {
        "id": str(crash_id),
        "time": crash_id.time(),
        "argv": list(sys.argv[1:] if argv is None else argv),
        "type": exc_type.__name__ if exc_type else "Unknown",
        "msg": str(exc_value) if exc_value else "",
        "traceback": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
    }


def log_crash(exc_type, exc_value, exc_tb):
    """Report a crash on stderr and append it to the crash log. Never raises."""
    record = crash_record(exc_type, exc_value, exc_tb)
    rule = "=" * 60
    sys.stderr.write(f"\n{rule}\nCRASH [{record['id']}] {record['time']}\n{rule}\n")
    sys.stderr.write(f"ksuid {' '.join(record['argv'])}\n{record['traceback']}{rule}\n\n")
    _append_record(record)


def install_crash_handler():
    """Route uncaught exceptions through log_crash."""
    sys.excepthook = log_crash
