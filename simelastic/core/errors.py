"""Exceptions raised while reading model input."""


class InputError(ValueError):
    """Malformed or out-of-range model input.

    Raised by the token and attribute helpers of the input parsers. The parser
    entry points turn it into a logged diagnostic and a False return value.
    """

    pass
