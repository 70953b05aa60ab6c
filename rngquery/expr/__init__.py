"""Expression recognizers and the evaluation dispatch.

Recognizers are tried in a fixed order: keywords, dice, interval. The first
one that matches wins. A recognizer that matches the shape of its grammar
but finds invalid values raises instead of letting the text fall through
to the next one.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..errors import ExpressionError
from ..sample import Sample, TextSample
from .base import Invalid, NoMatch
from .coin import toss_coin
from .color import gen_color
from .dice import Roll
from .interval import Interval
from .uuid_v4 import gen_uuid


class ExprKind(str, Enum):
    Text = "text"
    Coin = "coin"
    Dice = "dice"
    Interval = "interval"
    Color = "color"
    Uuid = "uuid"


KEYWORDS = {
    "coin": ExprKind.Coin,
    "color": ExprKind.Color,
    "uuid": ExprKind.Uuid,
}


@dataclass(frozen=True)
class ParsedExpr:
    kind: ExprKind
    text: str
    spec: Optional[Union[Roll, Interval]] = None

    @classmethod
    def literal(cls, text: str) -> "ParsedExpr":
        return cls(ExprKind.Text, text)


def parse_expr(text: str) -> ParsedExpr:
    """Classify an entry's text into one of the expression kinds.

    Raises:
        ExpressionError: if the text is a malformed dice roll or interval
    """
    kind = KEYWORDS.get(text)
    if kind is not None:
        return ParsedExpr(kind, text)

    for kind, recognizer in ((ExprKind.Dice, Roll.parse), (ExprKind.Interval, Interval.parse)):
        try:
            return ParsedExpr(kind, text, recognizer(text))
        except NoMatch:
            continue
        except Invalid as e:
            raise ExpressionError(str(e)) from e

    return ParsedExpr.literal(text)


def evaluate(expr: ParsedExpr, rng: random.Random) -> Sample:
    """Draw one sample for ``expr`` from ``rng``."""
    if expr.kind is ExprKind.Text:
        return TextSample(expr.text)
    if expr.kind is ExprKind.Coin:
        return toss_coin(rng)
    if expr.kind is ExprKind.Color:
        return gen_color(rng)
    if expr.kind is ExprKind.Uuid:
        return gen_uuid(rng)
    if expr.kind is ExprKind.Dice:
        return expr.spec.roll(rng)
    if expr.kind is ExprKind.Interval:
        return expr.spec.sample(rng)
    raise ValueError(f"Unknown expression kind: {expr.kind}")
