#!/usr/bin/env python
import argparse
import os
import sys

from loguru import logger

from rngquery import Interpreter, QueryError, StmtOutput


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rq", description="rq - pseudorandomness the easy way")
    parser.add_argument("query", nargs="?", help="Query to evaluate, skip to only read entries from stdin")
    parser.add_argument("-E", "--hide-expr", action="store_true", help="Print only the sampled values")
    parser.add_argument(
        "-e",
        "--eval-stdin",
        action="store_true",
        help="Run each stdin line as a query line instead of adding it as a data entry",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed the pseudorandom generator (env: RQ_SEED)")
    parser.add_argument("--stmt-sep", help="Statement separator (default ';')")
    parser.add_argument("--entry-sep", help="Entry separator (default ',')")
    parser.add_argument("--options-sep", help="Options separator (default '/')")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log interpreter activity to stderr")
    return parser


def _print(output: StmtOutput, hide_expr: bool) -> None:
    sys.stdout.write(output.render(hide_expr))


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("rngquery")

    seed = args.seed
    if seed is None and os.getenv("RQ_SEED"):
        try:
            seed = int(os.environ["RQ_SEED"])
        except ValueError:
            parser.error(f"RQ_SEED must be an integer, got {os.environ['RQ_SEED']!r}")

    interp = Interpreter(seed=seed)
    try:
        changes = {
            name: value
            for name, value in (("stmt", args.stmt_sep), ("entry", args.entry_sep), ("options", args.options_sep))
            if value is not None
        }
        if changes:
            interp.set_separators(**changes)

        if args.query is None or not sys.stdin.isatty():
            for line in sys.stdin:
                line = line.strip()
                if not line:
                    continue
                if args.eval_stdin:
                    for output in interp.iter_line(line):
                        _print(output, args.hide_expr)
                else:
                    interp.add_entry(line)

        for output in interp.iter_line(args.query or ""):
            _print(output, args.hide_expr)
        flushed = interp.eof()
        if flushed is not None:
            _print(flushed, args.hide_expr)
    except QueryError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
