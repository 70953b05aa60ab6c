"""Options clause of a statement: how many entries to pick and how.

``"3ro"`` picks 3 entries with replacement and keeps their original order.
See :meth:`Options.parse` for the full grammar.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from .errors import OptionsError
from .grammar import try_parse

ALL = "all"
MAX_AMOUNT = 2**32 - 1

Amount = Union[Literal["all"], NonNegativeInt]


class Options(BaseModel):
    """Selection policy of a statement.

    ``eval_expr`` is ``None`` for the automatic policy: entries are evaluated
    as expressions only when the statement has exactly one entry.
    """
    model_config = ConfigDict(frozen=True)

    amount: Amount = 1
    repeating: bool = False
    keep_order: bool = False
    eval_expr: Optional[bool] = None
    push: bool = False

    def count(self, population: int) -> int:
        return population if self.amount == ALL else self.amount

    def evaluates_expressions(self, entry_count: int) -> bool:
        if self.eval_expr is None:
            return entry_count == 1
        return self.eval_expr

    @classmethod
    def parse(cls, text: str) -> "Options":
        """Parse an options clause.

        Presets ``shuffle``, ``list`` and ``eval`` bypass the grammar.
        Otherwise: an optional amount (``all``, ``0`` or a positive integer)
        followed by any of the flags ``r`` (repeat), ``o`` (keep order),
        ``e``/``E`` (force/forbid expressions) and ``p`` (push results).

        Raises:
            OptionsError: on bad syntax, duplicate or incompatible flags
        """
        text = text.strip()
        preset = PRESETS.get(text)
        if preset is not None:
            return preset
        if not text:
            return cls()

        tree = try_parse("options", text)
        if tree is None:
            raise OptionsError(f"Bad options: {text}")
        amount_tree, *flag_toks = tree.children

        amount: Amount = 1
        if amount_tree is not None:
            tok = amount_tree.children[0]
            if tok.type == "ALL":
                amount = ALL
            else:
                amount = int(tok)
                if amount > MAX_AMOUNT:
                    raise OptionsError(f"Bad amount: {tok} is too large")

        flags = sorted(str(t) for t in flag_toks)
        duplicated = sorted({f for f in flags if flags.count(f) > 1})
        if duplicated:
            raise OptionsError(f"Duplicate flags: {''.join(duplicated)}")

        if "e" in flags and "E" in flags:
            raise OptionsError("Flags 'e' and 'E' are incompatible")
        eval_expr = None
        if "e" in flags or "E" in flags:
            eval_expr = "e" in flags

        return cls(
            amount=amount,
            repeating="r" in flags,
            keep_order="o" in flags,
            eval_expr=eval_expr,
            push="p" in flags,
        )


PRESETS = {
    "shuffle": Options(amount=ALL, eval_expr=False),
    "list": Options(amount=ALL, eval_expr=False, keep_order=True),
    "eval": Options(amount=ALL, eval_expr=True, keep_order=True),
}
