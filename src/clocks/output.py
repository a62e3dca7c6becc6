from __future__ import annotations

import sys
from typing import Iterable, TextIO


def write_lines(lines: Iterable[str], stream: TextIO | None = None) -> None:
    out_stream = stream or sys.stdout
    for line in lines:
        print(line, file=out_stream)
