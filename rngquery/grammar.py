from functools import lru_cache
from pathlib import Path

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

GRAMMAR_DIR = Path(__file__).with_name("grammars")


@lru_cache(maxsize=None)
def load_parser(name: str) -> Lark:
    """Build the LALR parser for ``grammars/<name>.lark`` once per process."""
    grammar = (GRAMMAR_DIR / f"{name}.lark").read_text(encoding="utf-8")
    return Lark(grammar, start="start", parser="lalr", maybe_placeholders=True)


def try_parse(name: str, text: str) -> Tree | None:
    """Parse ``text`` with the named grammar, ``None`` if it doesn't match."""
    try:
        return load_parser(name).parse(text)
    except UnexpectedInput:
        return None
