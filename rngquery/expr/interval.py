"""Interval expressions.

Two notations are recognized:

- bracket form ``[1..10]``, ``(0, 1]``, ``[1..=5)``: ``[``/``]`` include
  the endpoint, ``(``/``)`` exclude it;
- bare form ``1..10`` (end exclusive) and ``1..=10`` (end inclusive).

A comma separator or a decimal point in either endpoint makes it a float
interval, otherwise it samples integers.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Tuple, Union

from ..grammar import try_parse
from ..sample import Sample
from .base import Invalid, NoMatch

MIN_I32 = -(2**31)
MAX_I32 = 2**31 - 1

START = "start"
END = "end"
TOO_BIG = "value is too big"
EMPTY_INTERVAL = "the interval is empty"


class IntervalParseError(Exception):
    pass


class IntervalNoMatch(IntervalParseError, NoMatch):
    """The input is not an interval."""


class IntervalInvalid(IntervalParseError, Invalid):
    def __init__(self, message: str):
        super().__init__(f"invalid interval: {message}")


@dataclass(frozen=True)
class IntRange:
    """Canonical half-open integer range ``[start, end)``."""
    start: int
    end: int


@dataclass(frozen=True)
class FloatRange:
    start: float
    end: float


def _parse_int(num: str, part: str) -> int:
    value = int(num)
    if not MIN_I32 <= value <= MAX_I32:
        raise IntervalInvalid(f"{part}: number too large to fit in target type")
    return value


def _parse_float(num: str, part: str) -> float:
    try:
        value = float(num)
    except ValueError as e:
        raise IntervalInvalid(f"{part}: {e}") from e
    if not math.isfinite(value):
        raise IntervalInvalid(f"{part} {TOO_BIG}")
    return value


def build_int_range(start: int, end: int, low_inc: bool, high_inc: bool) -> IntRange:
    if not low_inc:
        start += 1
        if start > MAX_I32:
            raise IntervalInvalid(f"{START} {TOO_BIG}")
    if high_inc:
        end += 1
        if end > MAX_I32:
            raise IntervalInvalid(f"{END} {TOO_BIG}")
    if start >= end:
        raise IntervalInvalid(EMPTY_INTERVAL)
    return IntRange(start, end)


@dataclass(frozen=True)
class Interval:
    low_inc: bool
    high_inc: bool
    bounds: Union[IntRange, FloatRange]

    @classmethod
    def parse(cls, text: str) -> "Interval":
        try:
            return _parse_range(text)
        except IntervalNoMatch:
            pass
        return _parse_interval(text)

    @property
    def is_float(self) -> bool:
        return isinstance(self.bounds, FloatRange)

    def endpoints(self) -> Tuple[Union[int, float], Union[int, float]]:
        """Endpoints as written, before canonicalization."""
        b = self.bounds
        if isinstance(b, FloatRange):
            return b.start, b.end
        start = b.start if self.low_inc else b.start - 1
        end = b.end - 1 if self.high_inc else b.end
        return start, end

    def sample(self, rng: random.Random) -> "IntervalSample":
        b = self.bounds
        if isinstance(b, IntRange):
            return IntervalSample(self, rng.randrange(b.start, b.end))
        return IntervalSample(self, self._sample_float(rng, b))

    def _sample_float(self, rng: random.Random, b: FloatRange) -> float:
        scale = b.end - b.start
        if self.low_inc and self.high_inc:
            return rng.uniform(b.start, b.end)
        if self.low_inc:
            while True:
                value = b.start + scale * rng.random()
                if value < b.end:
                    return value
        if self.high_inc:
            # (0, 1]
            return b.start + scale * (1.0 - rng.random())
        while True:
            unit = rng.random()
            if unit != 0.0:
                value = b.start + scale * unit
                if value < b.end:
                    return value

    def __str__(self) -> str:
        start, end = self.endpoints()
        sep = ", " if self.is_float else ".."
        low = "[" if self.low_inc else "("
        high = "]" if self.high_inc else ")"
        return f"{low}{start}{sep}{end}{high}"


@dataclass(frozen=True)
class IntervalSample(Sample):
    interval: Interval
    number: Union[int, float]

    def full(self) -> str:
        return f"{self.interval}: {self.number}"

    def value(self) -> str:
        return str(self.number)


def _parse_interval(text: str) -> Interval:
    tree = try_parse("interval", text)
    if tree is None:
        raise IntervalNoMatch(text)
    open_tok, start, sep, end, close_tok = tree.children

    low_inc = open_tok == "["
    high_inc = close_tok == "]"
    is_float = sep.type == "COMMA" or "." in start or "." in end

    if is_float:
        low = _parse_float(start, START)
        high = _parse_float(end, END)
        if not low < high:
            raise IntervalInvalid(EMPTY_INTERVAL)
        # sampling scales by the span, which must stay finite too
        if not math.isfinite(high - low):
            raise IntervalInvalid("the interval is too wide")
        bounds: Union[IntRange, FloatRange] = FloatRange(low, high)
    else:
        bounds = build_int_range(_parse_int(start, START), _parse_int(end, END), low_inc, high_inc)
    return Interval(low_inc=low_inc, high_inc=high_inc, bounds=bounds)


def _parse_range(text: str) -> Interval:
    tree = try_parse("range", text)
    if tree is None:
        raise IntervalNoMatch(text)
    start, sep, end = tree.children
    inclusive = sep.type == "RANGE_INCL"
    bounds = build_int_range(_parse_int(start, START), _parse_int(end, END), True, inclusive)
    return Interval(low_inc=True, high_inc=inclusive, bounds=bounds)
