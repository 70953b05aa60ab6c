from __future__ import annotations

import random
from typing import Iterator, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .entry import PendingEntry, Resolver
from .errors import ConfigError, QueryError
from .expr import evaluate
from .options import Options
from .sample import StmtOutput
from .selector import select
from .tokenizer import PartKind, split_line_parts

RESERVED = '"()[]{}'


class Separators(BaseModel):
    """Characters that end a statement, an entry and the entries of a statement.

    A newline always ends a statement when running a whole program.
    """
    model_config = ConfigDict(frozen=True)

    stmt: str = ";"
    entry: str = ","
    options: str = "/"

    @field_validator("stmt", "entry", "options")
    @classmethod
    def single_char(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"separator must be a single character, got {v!r}")
        if v in RESERVED or v.isspace():
            raise ValueError(f"{v!r} can't be used as a separator")
        return v

    @model_validator(mode="after")
    def distinct(self) -> "Separators":
        if len({self.stmt, self.entry, self.options}) != 3:
            raise ValueError("separators must be different characters")
        return self


class Interpreter:
    """Query interpreter.

    Owns the pseudorandom source and the stack of pending entries. Entries
    accumulate across :meth:`run_line` calls until a statement ends.
    """

    def __init__(self, seed: Optional[int] = None, sep: Optional[Separators] = None):
        # seed=None draws the seed from system entropy
        self._rng = random.Random(seed)
        self.sep = sep or Separators()
        self.stack: List[PendingEntry] = []
        self._next_id = 0

    def set_separators(self, **changes: str) -> Separators:
        """Replace some of the separators, e.g. ``set_separators(stmt="|")``."""
        try:
            self.sep = Separators(**{**self.sep.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigError(str(e)) from e
        return self.sep

    def add_entry(self, text: str) -> None:
        """Push an entry without tokenizing it. Blank text is ignored."""
        text = text.strip()
        if not text:
            return
        self.stack.append(PendingEntry(self._next_id, text))
        self._next_id += 1

    def iter_line(self, line: str) -> Iterator[StmtOutput]:
        """Run one line, yielding the output of each statement it ends.

        Entries after the last statement separator stay pending unless the
        line gives an options clause for them.
        """
        options: Optional[Options] = None
        try:
            for part in split_line_parts(line, self.sep):
                if part.kind is PartKind.Entry:
                    self.add_entry(part.text)
                elif part.kind is PartKind.Options:
                    if options is not None:
                        raise QueryError("more than one options clause in a statement")
                    options = Options.parse(part.text)
                else:
                    yield self._end_stmt(options or Options())
                    options = None

            if options is not None:
                yield self._end_stmt(options)
        except QueryError as e:
            self._discard_pending(e)
            raise

    def run_line(self, line: str) -> List[StmtOutput]:
        return list(self.iter_line(line))

    def eof(self) -> Optional[StmtOutput]:
        """Signal the end of the input.

        Ends the pending statement with default options, if there is one.
        """
        if not self.stack:
            return None
        return self._end_stmt(Options())

    def _end_stmt(self, options: Options) -> StmtOutput:
        eval_expr = options.evaluates_expressions(len(self.stack))
        entries, self.stack = self.stack, []
        logger.debug("Statement with {} entries, options={}, eval_expr={}", len(entries), options, eval_expr)

        selected = select(self._rng, entries, options)
        logger.debug("Selected {} of {} entries", len(selected), len(entries))

        resolver = Resolver(eval_expr)
        samples = [evaluate(resolver.resolve(e), self._rng) for e in selected]

        if options.push:
            logger.debug("Pushing {} samples back as entries", len(samples))
            for sample in samples:
                self.add_entry(sample.value())
            return StmtOutput()
        return StmtOutput(samples)

    def _discard_pending(self, error: QueryError) -> None:
        if self.stack:
            logger.debug("Discarding {} pending entries after error: {}", len(self.stack), error)
        self.stack = []


def run(program: str, seed: Optional[int] = None, sep: Optional[Separators] = None) -> List[StmtOutput]:
    """Run a whole program; every newline ends a statement."""
    interpreter = Interpreter(seed=seed, sep=sep)
    outputs: List[StmtOutput] = []
    for line in program.splitlines():
        outputs.extend(interpreter.run_line(line))
        flushed = interpreter.eof()
        if flushed is not None:
            outputs.append(flushed)
    return outputs
