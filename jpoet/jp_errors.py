"""
Faults raised while building or emitting a source model.

All faults are programmer errors in how a model was assembled. They carry a
bracketed code (e.g. "[BLD-0010]") so callers and tests can match them
without depending on the wording of the message.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import re
from typing import Optional


ERROR_CODE_FAMILIES = {
    # Builder-time faults on names, modifiers and declarations.
    "BLD": [
        "BLD-0010",
        "BLD-0011",
        "BLD-0012",
        "BLD-0020",
        "BLD-0030",
        "BLD-0031",
        "BLD-0032",
        "BLD-0033",
        "BLD-0034",
        "BLD-0040",
        "BLD-0041",
        "BLD-0042",
        "BLD-0050",
        "BLD-0051",
        "BLD-0052",
        "BLD-0053",
        "BLD-0054",
        "BLD-0055",
        "BLD-0056",
        "BLD-0057",
        "BLD-0058",
        "BLD-0060",
        "BLD-0061",
        "BLD-0062",
        "BLD-0063",
        "BLD-0070",
        "BLD-0071",
        "BLD-0072",
        "BLD-0073",
        "BLD-0074",
        "BLD-0080",
    ],
    # Format block construction faults.
    "FMT": [
        "FMT-0010",
        "FMT-0011",
        "FMT-0012",
        "FMT-0013",
        "FMT-0014",
        "FMT-0015",
        "FMT-0016",
        "FMT-0020",
        "FMT-0021",
    ],
    # Emission-time faults.
    "EMT": [
        "EMT-0010",
        "EMT-0020",
        "EMT-0021",
        "EMT-0030",
        "EMT-0040",
        "EMT-0041",
    ],
    # File output faults.
    "OUT": [
        "OUT-0010",
    ],
}

_CODE_RE = re.compile(r"^\[([A-Z]{3}-\d{4})\]")


class PoetError(Exception):
    """
    Base class for every fault raised by jpoet.
    Not recoverable: the model or the template that caused it is malformed.
    """

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def code(self) -> Optional[str]:
        match = _CODE_RE.match(self.message)
        return match.group(1) if match else None

    def format(self) -> str:
        message = self.message
        if self.code is None:
            message = f"[{self.default_code}] {message}"
        return f"{self.kind}: {message}"

    default_code = "ERR-9999"


class BuildError(PoetError, ValueError):
    """Invalid model construction: names, modifiers, formats, structure."""

    kind = "build error"
    default_code = "BLD-9999"


class EmissionError(PoetError, RuntimeError):
    """Violated writer invariant while emitting source text."""

    kind = "emission error"
    default_code = "EMT-9999"
