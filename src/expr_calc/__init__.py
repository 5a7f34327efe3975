"""expr-calc: compile arithmetic expressions once, evaluate them fast.

Supports:
  - Floating point literals, named variables (passed as a table)
  - + - (unary and binary), * /, parentheses
  - Math functions abs, exp, exp2, log, log10, sqrt, cbrt,
    sin, cos, tan, asin, acos, atan, sinh, cosh, tanh, asinh, acosh,
    atanh, erf, erfc, lgamma, tgamma, ceil, floor, trunc, round
  - Two-argument functions mod, rem, max, min, hypot, pow, atan2
  - Degrees, radians or gradians for the trigonometric functions

Architecture:
  Text is compiled by a single-pass shunting-yard compiler into a flat
  postfix program.  The program is run on a stack machine whose stack
  is sized by a depth analysis done at compile time.

Usage as library:
    from expr_calc import Variable, EvalContext, compile_expr, evaluate
    x = Variable('x', 5.0)
    prog = compile_expr('x*2', [x])
    evaluate(prog, EvalContext('radians'))    # 10.0
"""

from .errors import (ExprError, InvalidNumberError, NumberOutOfRangeError,
                     IdentifierTooLongError, InvalidIdentifierError,
                     OperatorExpectedError, UnexpectedOperatorError,
                     UnmatchedParenthesisError, EmptyParenthesisError,
                     WrongParameterCountError, CommaMisplacedError,
                     UnexpectedCharacterError, UnexpectedEndError,
                     AllocationError)
from .variables import Variable
from .program import Program, destroy
from .lexer import count_elements
from .machine import (DEGREES, RADIANS, GRADIANS, EvalContext,
                      max_stack_depth, evaluate)
from .compiler import compile_expr
from .diagnostics import dump, describe, format_error

__version__ = '1.0.0'
