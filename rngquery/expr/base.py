class NoMatch(Exception):
    """A recognizer declined the input: it is not its grammar."""


class Invalid(Exception):
    """A recognizer matched the input but its values are not valid."""
