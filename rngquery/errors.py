class QueryError(Exception):
    pass


class TokenizeError(QueryError):
    """Raised when a line can't be split into entries, options and statements."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"inline entries: {message}")
        self.offset = offset


class UnclosedStringError(TokenizeError):
    def __init__(self, start: int):
        super().__init__("missing trailing '\"' to close a string", start)
        self.start = start


class UnbalancedNestingError(TokenizeError):
    def __init__(self, offset: int, what: str):
        super().__init__(f"unbalanced {what}", offset)
        self.what = what


class OptionsError(QueryError):
    """Raised when the options clause of a statement is malformed."""

    def __init__(self, message: str):
        super().__init__(f"options: {message}")


class ExpressionError(QueryError):
    """Raised when an entry looks like an expression but is not a valid one."""

    def __init__(self, message: str):
        super().__init__(f"expression: {message}")


class ConfigError(QueryError):
    """Raised when separators or other settings are invalid."""

    def __init__(self, message: str):
        super().__init__(f"config: {message}")
