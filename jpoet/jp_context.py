"""
Generation context for cross-cutting generator options.

This module defines the GenerationContext dataclass which holds options that
affect more than one part of source generation (file output, logging, and
the default indentation unit).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the generator."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages
    DEBUG = 30      # Detailed name resolution / import information


@dataclass
class GenerationContext:
    """
    Holds cross-cutting options used while emitting and writing source files.

    Attributes:
        indent:             Default indentation unit for new JavaFile builders.
        file_extension:     Extension appended to the type name when writing files.
        encoding:           Text encoding used for written source files.
        log_rich_format:    If True, emit logs in rich format (level and timestamp).
        log_level:          Current logging level.
    """
    indent: str = "  "
    file_extension: str = ".java"
    encoding: str = "utf-8"
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'GenerationContext':
        """Create a GenerationContext with default settings."""
        return GenerationContext(log_level=LogLevel.WARNING)
