"""
Exception hierarchy for the seating simulation.

Input problems are detected once, when the layout is parsed, and carry the
offending line/character so the caller can report them verbatim.
"""

from typing import Optional


class SeatingError(Exception):
    """Base class for all errors raised by the seating package."""


class MalformedGrid(SeatingError, ValueError):
    """
    Raised when layout rows do not all have the same length, or the layout is empty.

    Attributes:
        line_number: 1-based line that broke the layout (None for empty input)
        expected: Width established by the first line
        actual: Width of the offending line
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.expected = expected
        self.actual = actual


class InvalidSymbol(SeatingError, ValueError):
    """
    Raised when a layout contains a character other than '.', 'L' or '#'.

    Attributes:
        symbol: The unrecognized character
        line_number: 1-based line of the character (None outside a layout)
        column: 1-based column of the character (None outside a layout)
    """

    def __init__(
        self,
        symbol: str,
        line_number: Optional[int] = None,
        column: Optional[int] = None,
    ):
        if line_number is None:
            message = f"invalid symbol {symbol!r}"
        else:
            message = f"invalid symbol {symbol!r} at line {line_number}, column {column}"
        super().__init__(message)
        self.symbol = symbol
        self.line_number = line_number
        self.column = column


class NonConvergence(SeatingError, RuntimeError):
    """
    Raised when a simulation exceeds its iteration bound without reaching a fixed point.

    Attributes:
        iterations: Number of generations computed before giving up
    """

    def __init__(self, iterations: int):
        super().__init__(
            f"simulation did not reach a fixed point within {iterations} iterations"
        )
        self.iterations = iterations
