"""Dice roll expressions: ``2d6``, ``d%``, ``4d6k3``, ``3d10!dl+2-1``."""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from lark import Token

from ..grammar import try_parse
from ..sample import Sample
from .base import Invalid, NoMatch

MAX_U16 = 0xFFFF
MIN_I32 = -(2**31)
MAX_I32 = 2**31 - 1


class RollParseError(Exception):
    pass


class RollNoMatch(RollParseError, NoMatch):
    """The input is not a dice roll."""


class RollInvalid(RollParseError, Invalid):
    def __init__(self, message: str):
        super().__init__(f"invalid dice roll: {message}")


class SelectAction(str, Enum):
    Keep = "keep"
    Drop = "drop"


class SelectWhich(str, Enum):
    High = "high"
    Low = "low"


@dataclass(frozen=True)
class SelectDice:
    """Keep or drop the ``amount`` highest or lowest dice."""
    amount: int
    action: SelectAction
    which: SelectWhich

    def symbol(self) -> str:
        if self.action is SelectAction.Keep:
            return "k" if self.which is SelectWhich.High else "kl"
        return "dh" if self.which is SelectWhich.High else "d"


_SELECT_KINDS = {
    "k": (SelectAction.Keep, SelectWhich.High),
    "kh": (SelectAction.Keep, SelectWhich.High),
    "kl": (SelectAction.Keep, SelectWhich.Low),
    "d": (SelectAction.Drop, SelectWhich.Low),
    "dl": (SelectAction.Drop, SelectWhich.Low),
    "dh": (SelectAction.Drop, SelectWhich.High),
}


def _parse_u16(tok: Token, what: str) -> int:
    value = int(tok)
    if value > MAX_U16:
        raise RollInvalid(f"bad {what}: {tok} is larger than {MAX_U16}")
    if value == 0:
        raise RollInvalid(f"{what} can't be 0")
    return value


@dataclass(frozen=True)
class Roll:
    """A description of a dice roll.

    ``exploding`` dice roll one extra die each time a die lands on its
    maximum face. The extra dice join the same group.
    """
    amount: int = 1
    sides: int = 6
    exploding: bool = False
    select: Optional[SelectDice] = None
    modifier: int = 0

    @classmethod
    def parse(cls, text: str) -> "Roll":
        tree = try_parse("dice", text)
        if tree is None:
            raise RollNoMatch(text)
        amount_tok, sides_tree, explode_tok, select_tree, *modifiers = tree.children

        amount = 1 if amount_tok is None else _parse_u16(amount_tok, "amount")

        sides_tok = sides_tree.children[0]
        if sides_tok.type == "PERCENT":
            sides = 100
        else:
            sides = _parse_u16(sides_tok, "number of sides")

        select = None
        if select_tree is not None:
            kind_tok, select_amount_tok = select_tree.children
            action, which = _SELECT_KINDS[str(kind_tok)]
            select_amount = 1
            if select_amount_tok is not None:
                select_amount = _parse_u16(select_amount_tok, "select amount")
            select = SelectDice(amount=select_amount, action=action, which=which)

        modifier = sum(int(m) for m in modifiers)
        if not MIN_I32 <= modifier <= MAX_I32:
            raise RollInvalid(f"bad modifier: {modifier} is out of range")

        return cls(
            amount=amount,
            sides=sides,
            exploding=explode_tok is not None,
            select=select,
            modifier=modifier,
        )

    @property
    def explodes(self) -> bool:
        # a one sided die always lands on its maximum, it would never stop
        return self.exploding and self.sides > 1

    def roll(self, rng: random.Random) -> "RollSample":
        dice: List[Die] = []
        for _ in range(self.amount):
            while True:
                value = rng.randint(1, self.sides)
                dice.append(Die(value))
                if not (self.explodes and value == self.sides):
                    break

        if self.select is not None:
            dice.sort(key=lambda d: d.value)
            for die in self._dropped(dice, self.select):
                die.dropped = True

        return RollSample(roll=self, dice=dice)

    @staticmethod
    def _dropped(dice: List["Die"], select: SelectDice) -> List["Die"]:
        n = select.amount
        split = max(len(dice) - n, 0)
        if select.action is SelectAction.Keep:
            return dice[:split] if select.which is SelectWhich.High else dice[n:]
        return dice[split:] if select.which is SelectWhich.High else dice[:n]

    def __str__(self) -> str:
        out = []
        if self.amount > 1:
            out.append(str(self.amount))
        out.append(f"d{self.sides}")
        if self.exploding:
            out.append("!")
        if self.select is not None:
            out.append(self.select.symbol())
            if self.select.amount > 1:
                out.append(str(self.select.amount))
        out.append(format_modifier(self.modifier))
        return "".join(out)


@dataclass
class Die:
    value: int
    dropped: bool = False

    def __str__(self) -> str:
        return f"{self.value}d" if self.dropped else str(self.value)


@dataclass(frozen=True)
class RollSample(Sample):
    """Result of a :class:`Roll`; value-only rendering is the total."""
    roll: Roll
    dice: List[Die]

    def kept(self) -> List[int]:
        return [d.value for d in self.dice if not d.dropped]

    @property
    def total(self) -> int:
        return sum(self.kept()) + self.roll.modifier

    def full(self) -> str:
        roll = self.roll
        details = ""
        if roll.exploding or roll.select is not None or roll.modifier != 0:
            dice = "+".join(str(d) for d in self.dice)
            details = f"[{dice}]{format_modifier(roll.modifier)} = "
        return f"{roll}: {details}{self.total}"

    def value(self) -> str:
        return str(self.total)


def format_modifier(modifier: int) -> str:
    return f"{modifier:+d}" if modifier else ""
