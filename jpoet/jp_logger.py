"""
Logging utilities for jpoet.

This module provides logging functions that respect the GenerationContext
log level and format flags.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from jp_context import GenerationContext, LogLevel


def log(context: Optional[GenerationContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's level admits it.

    Args:
        context:    The generation context holding the logging level. When None,
                    only errors are printed.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        if log_level <= LogLevel.ERROR:
            print(f"{message}", file=sys.stderr)
        return
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[GenerationContext], message: str) -> None:
    """Log an error-level message."""
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[GenerationContext], message: str) -> None:
    """Log a warning-level message."""
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[GenerationContext], message: str) -> None:
    """Log an info-level message."""
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[GenerationContext], message: str) -> None:
    """Log a debug-level message."""
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[GenerationContext], stage: str, unit: Optional[str] = None) -> None:
    """
    Log the start of a generation stage.

    Args:
        context: The generation context containing logging flags.
        stage: The name of the stage (e.g., "Collecting imports", "Emitting").
        unit: Optional name of the file or type being processed.
    """
    if unit:
        log(context, LogLevel.INFO, f"{stage} '{unit}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
