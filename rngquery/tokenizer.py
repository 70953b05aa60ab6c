"""Split a query line into entries, an options clause and statement ends.

Separators only take effect outside of brackets and quoted strings, so
``"(a, b), c"`` has two entries and ``"\\"a;b\\"; c"`` two statements.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .errors import UnbalancedNestingError, UnclosedStringError

if TYPE_CHECKING:
    from .interpreter import Separators


class PartKind(str, Enum):
    Entry = "entry"
    Options = "options"
    EndStmt = "end_stmt"


@dataclass(frozen=True)
class QueryPart:
    kind: PartKind
    text: str = ""


END_STMT = QueryPart(PartKind.EndStmt)


class Nest(Enum):
    Paren = "parenthesis"
    Square = "square brackets"
    Curly = "curly braces"

    @classmethod
    def from_char(cls, c: str) -> "Nest":
        if c in "()":
            return cls.Paren
        if c in "[]":
            return cls.Square
        return cls.Curly

    def matches(self, other: "Nest") -> bool:
        # round and square brackets close each other
        if self is other:
            return True
        return self is not Nest.Curly and other is not Nest.Curly


OPENERS = "([{"
CLOSERS = ")]}"


def split_line_parts(line: str, sep: "Separators") -> Iterator[QueryPart]:
    """Lazily yield the parts of ``line``.

    Raises :class:`~rngquery.errors.TokenizeError` at the first problem,
    after yielding the parts found before it. Error offsets count UTF-8
    bytes.
    """
    if "\n" in line:
        raise ValueError("unexpected newline inside a single line")
    return _SplitParts(line, sep).parts()


def trim_entry(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"' and text.count('"') == 2:
        text = text[1:-1].strip()
    return text


class _SplitParts:
    def __init__(self, line: str, sep: "Separators"):
        self.line = line
        self.sep = sep
        self.pos = 0
        self.last_end = 0

    def parts(self) -> Iterator[QueryPart]:
        while self.pos < len(self.line):
            text, stop = self._next_entry()
            if stop is None or stop == self.sep.entry:
                yield QueryPart(PartKind.Entry, text)
                continue
            if text:
                yield QueryPart(PartKind.Entry, text)
            if stop == self.sep.options:
                options, ended = self._consume_options()
                yield options
                if not ended:
                    return
            yield END_STMT

    def _byte_offset(self, index: int) -> int:
        # errors report offsets into the UTF-8 encoded line
        return len(self.line[:index].encode("utf-8"))

    def _take_slice(self, skip: int) -> str:
        s = self.line[self.last_end:self.pos - skip]
        self.last_end = self.pos
        return trim_entry(s)

    def _next_entry(self) -> Tuple[str, Optional[str]]:
        """Consume up to the next active separator.

        Returns the trimmed entry and the separator that ended it, ``None``
        when the line ended first.
        """
        line = self.line
        separators = (self.sep.entry, self.sep.options, self.sep.stmt)
        # nesting never crosses an entry boundary, so the stack is local
        stack: List[Nest] = []
        while self.pos < len(line):
            c = line[self.pos]
            self.pos += 1
            if c == '"':
                self._consume_string()
            elif c in OPENERS:
                stack.append(Nest.from_char(c))
            elif c in CLOSERS:
                closer = Nest.from_char(c)
                if not stack:
                    raise UnbalancedNestingError(self._byte_offset(self.pos - 1), closer.value)
                if not stack[-1].matches(closer):
                    raise UnbalancedNestingError(self._byte_offset(self.pos - 1), stack[-1].value)
                stack.pop()
            elif not stack and c in separators:
                return self._take_slice(skip=1), c

        if stack:
            raise UnbalancedNestingError(self._byte_offset(len(line)), stack[-1].value)
        return self._take_slice(skip=0), None

    def _consume_string(self) -> None:
        start = self.pos - 1
        end = self.line.find('"', self.pos)
        if end == -1:
            raise UnclosedStringError(self._byte_offset(start))
        self.pos = end + 1

    def _consume_options(self) -> Tuple[QueryPart, bool]:
        end = self.line.find(self.sep.stmt, self.pos)
        ended = end != -1
        if not ended:
            end = len(self.line)
        text = self.line[self.pos:end]
        self.pos = self.last_end = end + 1 if ended else end
        return QueryPart(PartKind.Options, text.strip()), ended
