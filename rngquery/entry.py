from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .expr import ParsedExpr, parse_expr


@dataclass(frozen=True)
class PendingEntry:
    """Entry waiting on the stack for the end of its statement.

    ``id`` comes from a per interpreter counter and is never reused; it is
    what ``keep_order`` sorts by.
    """
    id: int
    text: str


class Resolver:
    """Classifies selected entries once per statement.

    With replacement the same entry can be drawn several times; every draw
    shares the classification cached under the entry id, while evaluation
    still happens once per draw.
    """

    def __init__(self, eval_expr: bool):
        self.eval_expr = eval_expr
        self._cache: Dict[int, ParsedExpr] = {}

    def resolve(self, entry: PendingEntry) -> ParsedExpr:
        if not self.eval_expr:
            return ParsedExpr.literal(entry.text)
        parsed = self._cache.get(entry.id)
        if parsed is None:
            parsed = parse_expr(entry.text)
            self._cache[entry.id] = parsed
        return parsed
