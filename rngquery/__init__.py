"""Small query language for pseudorandomness.

Run a whole program with :func:`run`, or line by line with
:class:`Interpreter`::

    interp = Interpreter(seed=7)
    for output in interp.run_line("a, b, c / 2o; 2d6;"):
        print(output.render(), end="")
"""
from loguru import logger

from .errors import (
    ConfigError,
    ExpressionError,
    OptionsError,
    QueryError,
    TokenizeError,
    UnbalancedNestingError,
    UnclosedStringError,
)
from .interpreter import Interpreter, Separators, run
from .options import Options
from .sample import Sample, StmtOutput

# library convention: silent until an application enables it
logger.disable("rngquery")

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "ExpressionError",
    "Interpreter",
    "Options",
    "OptionsError",
    "QueryError",
    "Sample",
    "Separators",
    "StmtOutput",
    "TokenizeError",
    "UnbalancedNestingError",
    "UnclosedStringError",
    "run",
]
