"""Logging utilities."""

# Go Pairing
# Copyright (C) 2025  Go Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
import tempfile
from logging.handlers import RotatingFileHandler

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

# environment overrides
LOG_DIR_ENV = "GOPAIRING_LOG_DIR"
LOG_LEVEL_ENV = "GOPAIRING_LOG_LEVEL"
LOG_FILE_NAME = "go-pairing.log"


def _log_level() -> int:
    """Level from ``GOPAIRING_LOG_LEVEL``, INFO when unset or unknown."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _log_folder() -> str:
    """Folder for the log file.

    ``GOPAIRING_LOG_DIR`` wins; otherwise %APPDATA%\\Go Pairing on Windows and
    the temp directory everywhere else. A "logs" sub folder is always used.
    """
    base = os.environ.get(LOG_DIR_ENV)
    if not base:
        appdata = os.environ.get("APPDATA") if sys.platform == "win32" else None
        if appdata:
            base = os.path.join(appdata, "Go Pairing")
        else:
            base = os.path.join(tempfile.gettempdir(), "go-pairing")
    return os.path.join(base, "logs")


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    level = _log_level()
    lgr.setLevel(level)
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    log_formatter = logging.Formatter(LOG_FMT)

    # File Handler, skipped when the folder is not writable
    file_handler = None
    log_folder = _log_folder()
    try:
        os.makedirs(log_folder, exist_ok=True)
        log_path = os.path.join(log_folder, LOG_FILE_NAME)
        # Use RotatingFileHandler to prevent unbounded log growth
        file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(log_formatter)
    except OSError as e:
        print(f"Warning: Could not open log file in {log_folder}: {e}", file=sys.stderr)
        file_handler = None

    # Console Handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)
    # add handlers
    lgr.addHandler(console_handler)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr
