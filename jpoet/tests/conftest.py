#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from jp_code_writer import CodeWriter
from jp_context import GenerationContext, LogLevel


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def writer(out: io.StringIO) -> CodeWriter:
    return CodeWriter(out)


@pytest.fixture
def debug_context() -> GenerationContext:
    return GenerationContext(log_level=LogLevel.DEBUG)


@pytest.fixture
def parse_java():
    """Parse Java source with javalang; skips the test when javalang is not installed."""
    javalang = pytest.importorskip("javalang")

    def _parse(source: str):
        return javalang.parse.parse(source)

    return _parse
