"""Error types for expr-calc.

Every compile error carries the message shown to the user and the index
of the offending character in the source text.
"""


class ExprError(Exception):
    """Base error for expression compilation."""

    default_msg = 'Invalid expression'

    def __init__(self, pos, msg=None):
        self.pos = pos
        self.msg = msg or self.default_msg
        super().__init__(f"{pos}:{self.msg}")


class InvalidNumberError(ExprError):
    """No numeric literal could be read."""
    default_msg = 'Invalid number'


class NumberOutOfRangeError(ExprError):
    """Literal overflows a float64."""
    default_msg = 'Number out of range'


class IdentifierTooLongError(ExprError):
    """Identifier longer than MAX_IDENT_LEN."""
    default_msg = 'Identifier too long'


class InvalidIdentifierError(ExprError):
    """Identifier is neither a function call nor a known variable."""
    default_msg = 'Invalid identifier'


class OperatorExpectedError(ExprError):
    """Two operands next to each other."""
    default_msg = 'Operator expected'


class UnexpectedOperatorError(ExprError):
    """Operator where an operand is required."""
    default_msg = 'Unexpected operator'


class UnmatchedParenthesisError(ExprError):
    default_msg = 'Unmatched parenthesis'


class EmptyParenthesisError(ExprError):
    default_msg = 'Empty parenthesis'


class WrongParameterCountError(ExprError):
    default_msg = 'Wrong number of parameters'


class CommaMisplacedError(ExprError):
    default_msg = 'Comma not as parameter separator'


class UnexpectedCharacterError(ExprError):
    default_msg = 'Unexpected character'


class UnexpectedEndError(ExprError):
    default_msg = 'Unexpected end'


class AllocationError(ExprError):
    """Out of memory while building the program."""
    default_msg = 'Allocation failed'
