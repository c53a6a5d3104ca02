from __future__ import annotations
import csv
import logging
import re
from pathlib import Path
from typing import List

from .errors import InvalidPickError
from .rules import GameConfig, Pick

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
WORD_RE = re.compile(r"[A-Za-z]")


def _ints_in(s: str) -> List[int]:
    return [int(x) for x in re.findall(r"\d+", s)]


def _looks_like_iso_date(s: str) -> bool:
    return bool(DATE_RE.match(s.strip()))


def split_parts(numbers: List[int], config: GameConfig) -> List[List[int]]:
    """Cut a flat run of numbers into the config's parts, in order."""
    parts: List[List[int]] = []
    pos = 0
    for spec in config.parts:
        parts.append(numbers[pos:pos + spec.count])
        pos += spec.count
    return parts


def load_picks_csv(path: str | Path, config: GameConfig, strict: bool = True) -> List[Pick]:
    """
    Reads explicit picks from CSV/TXT, one pick per row.

    Integers are collected across the row (ISO dates and cells containing
    letters, such as header names, are ignored) and split into parts by
    the config's part counts, e.g. for PowerBall:
        4,8,15,16,23,42
    Rows with no numbers (headers, blanks) are skipped. A row that does not
    form a valid pick raises InvalidPickError naming the line, unless
    ``strict`` is False, in which case it is skipped.
    """
    picks: List[Pick] = []
    p = Path(path)
    needed = sum(spec.count for spec in config.parts)

    with p.open("r", encoding="utf-8", newline="") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            ints: List[int] = []
            for cell in row:
                if _looks_like_iso_date(cell) or WORD_RE.search(cell):
                    continue
                ints.extend(_ints_in(cell))
            if not ints:
                continue

            problems = {}
            if len(ints) != needed:
                problems[-1] = [f"expected {needed} numbers, got {len(ints)}"]
            else:
                parts = split_parts(ints, config)
                for i, (spec, part) in enumerate(zip(config.parts, parts)):
                    reasons = []
                    if len(set(part)) != len(part):
                        reasons.append("duplicate numbers")
                    if any(n < 1 or n > spec.max for n in part):
                        reasons.append(f"number out of range (1-{spec.max})")
                    if reasons:
                        problems[i] = reasons

            if problems:
                if strict:
                    raise InvalidPickError(f"{p.name}:{line_no}: invalid pick", details={line_no: problems})
                logger.warning("%s:%d: skipping invalid pick %s", p.name, line_no, ints)
                continue
            picks.append(Pick.of(parts))

    return picks
