"""JSON export of practice records."""

from __future__ import annotations

import json
from typing import TextIO


def render_practices_json(records: list[dict], indent: int = 4) -> str:
    # Record key order is part of the output contract, so no sort_keys.
    return json.dumps(records, ensure_ascii=False, indent=indent)


def write_practices_json(records: list[dict], stream: TextIO, indent: int = 4) -> None:
    stream.write(render_practices_json(records, indent=indent))
    stream.write("\n")
    stream.flush()
