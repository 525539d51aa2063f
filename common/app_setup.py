"""
Logging and console output setup shared by the vdisk CLI and daemon.

Functions:
    setup_logging      - Configure the root logger and return it.
    set_print_logger   - Set the logger mirrored by print_and_log and print_error.
    print_and_log      - Print (rich) and log an info message.
    print_error        - Print (rich, stderr) and log an error message.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional

from rich import print as rich_print
from rich.markup import escape

# Logger mirrored by print_and_log and print_error
_print_logger: Optional[logging.Logger] = None


def setup_logging(app_name: str = "vdisk", daemon: bool = False, loglevel: int | str = logging.INFO,
                  logfile: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the application.
    - If daemon=True, logs to syslog (Linux only), or stderr when syslog is unavailable.
    - Otherwise, logs to ~/.<app_name>/log.txt or to a custom logfile.
    Returns the configured logger.
    """
    logger = logging.getLogger()
    logger.setLevel(loglevel.upper() if isinstance(loglevel, str) else loglevel)
    handler: logging.Handler
    if daemon:
        formatter = logging.Formatter(f'%(asctime)s %(levelname)s %(process)d [{app_name}] %(name)s: %(message)s')
        try:
            handler = logging.handlers.SysLogHandler(address='/dev/log')
        except OSError:
            handler = logging.StreamHandler(sys.stderr)
    else:
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(process)d %(name)s: %(message)s')
        if logfile is None:
            log_dir = os.path.expanduser(f"~/.{app_name}")
            os.makedirs(log_dir, exist_ok=True)
            logfile = os.path.join(log_dir, "log.txt")
        handler = logging.FileHandler(logfile)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    set_print_logger(logger)
    logger.debug(f"Logging initialized for {app_name}")
    return logger


def set_print_logger(logger: Optional[logging.Logger]):
    """
    Set the logger used by print_and_log and print_error.
    """
    global _print_logger
    _print_logger = logger


def print_and_log(message: str, **kwargs):
    """
    Print to console and log as info. ``message`` is printed as plain text.
    """
    rich_print(escape(message), **kwargs)
    if _print_logger is not None:
        _print_logger.info(message)


def print_error(message: str, **kwargs):
    """
    Print an error in red to stderr and log it at error level.
    """
    rich_print(f'[bold red]{escape(message)}[/bold red]', file=sys.stderr, **kwargs)
    if _print_logger is not None:
        _print_logger.error(message)
