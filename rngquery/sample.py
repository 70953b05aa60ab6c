"""Rendered results of evaluated entries.

Every sample keeps the datum it was built from, so the full rendering
(expression and result) and the value-only rendering are always two views
of the same draw.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List


class Sample:
    """Result of evaluating one selected entry."""

    def full(self) -> str:
        raise NotImplementedError

    def value(self) -> str:
        raise NotImplementedError

    def render(self, hide_expr: bool = False) -> str:
        return self.value() if hide_expr else self.full()

    def __str__(self) -> str:
        return self.full()


@dataclass(frozen=True)
class TextSample(Sample):
    text: str

    def full(self) -> str:
        return self.text

    def value(self) -> str:
        return self.text


@dataclass
class StmtOutput:
    """Ordered samples produced by one statement."""
    samples: List[Sample] = field(default_factory=list)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    def lines(self, hide_expr: bool = False) -> List[str]:
        return [s.render(hide_expr) for s in self.samples]

    def render(self, hide_expr: bool = False) -> str:
        # one sample per line, each line terminated
        return "".join(f"{line}\n" for line in self.lines(hide_expr))
