"""Single-pass shunting-yard compiler: infix text -> postfix Program.

Syntax is checked while converting.  The only context the compiler keeps
between characters is the class of the previous token, which decides
whether ``+``/``-`` is a sign or a binary operator and whether an
operand or an operator may come next:

    =========  ==========  ===========================================
    class      value-like  set by
    =========  ==========  ===========================================
    START      no          beginning of input
    LPAR       no          ``(``
    SEP        no          ``,``
    FN         no          function name directly followed by ``(``
    ADD..DIV   no          binary operators
    NEG        no          unary minus
    VALUE      yes         number or variable
    RPAR       yes         ``)``
    =========  ==========  ===========================================

Unary plus is dropped and leaves the class unchanged; whitespace too.
"""

from .errors import (InvalidIdentifierError, OperatorExpectedError,
                     UnexpectedOperatorError, UnmatchedParenthesisError,
                     EmptyParenthesisError, WrongParameterCountError,
                     CommaMisplacedError, UnexpectedCharacterError,
                     UnexpectedEndError, AllocationError)
from .functions import fn_by_name
from .lexer import (LETTERS, NUMBER_START, WHITESPACE, count_elements,
                    is_number_start, scan_identifier, scan_number)
from .machine import max_stack_depth
from .program import (NUM, NEG, MUL, DIV, ADD, SUB, VAR, FN1, FN2, END_ELEM,
                      Program)
from .variables import var_index

# Token classes (previous-token register)
START = 'start'
LPAR = 'lpar'
RPAR = 'rpar'
SEP = 'sep'
FN = 'fn'
VALUE = 'value'

VALUE_LIKE = frozenset((VALUE, RPAR))
OPERATOR_CLASSES = frozenset((ADD, SUB, MUL, DIV, NEG))

# Lower binds tighter.  Anything without a rank (parens, functions)
# stops the popping.
PRECEDENCE = {
    NEG: 0,
    MUL: 1, DIV: 1,
    ADD: 2, SUB: 2,
}

_BINARY = {'+': ADD, '-': SUB, '*': MUL, '/': DIV}


class _Compiler:
    """Working state of one compile call."""

    def __init__(self, text, variables, capacity):
        self.text = text
        self.variables = variables
        self.i = 0
        self.prev = START
        self.ops = []
        # Output is sized once from the pre-scan, plus the end sentinel
        self.out = [None] * (capacity + 1)
        self.n = 0

    # ── output / operator stack ──

    def emit(self, elem):
        self.out[self.n] = elem
        self.n += 1

    def push_op(self, kind):
        """Pop everything that binds at least as tight, then push *kind*."""
        rank = PRECEDENCE[kind]
        ops = self.ops
        while ops and PRECEDENCE.get(ops[-1][0], rank + 1) <= rank:
            self.emit(ops.pop())
        ops.append((kind, None))

    def close_paren(self, pos):
        """``)``: unwind to the matching ``(`` and emit a pending function."""
        ops = self.ops
        while True:
            if not ops:
                raise UnmatchedParenthesisError(pos)
            kind, val = ops.pop()
            if kind == LPAR:
                break
            self.emit((kind, val))

        if ops and ops[-1][0] in (FN1, FN2):
            fn = ops[-1][1]
            if val != fn.arity - 1:
                raise WrongParameterCountError(
                    pos, f"Wrong number of parameters for {fn.name}(), "
                         f"expected {fn.arity}")
            self.emit(ops.pop())

    def separator(self, pos):
        """``,``: unwind to the enclosing ``(`` and count the argument."""
        ops = self.ops
        while True:
            if not ops:
                raise CommaMisplacedError(pos)
            kind, val = ops[-1]
            if kind == LPAR:
                break
            self.emit(ops.pop())

        if len(ops) < 2 or ops[-2][0] not in (FN1, FN2):
            raise CommaMisplacedError(pos)
        ops[-1] = (LPAR, val + 1)

    def drain(self, pos):
        """End of input: move what is left on the stack to the output."""
        ops = self.ops
        while ops:
            elem = ops.pop()
            if elem[0] == LPAR:
                raise UnmatchedParenthesisError(pos)
            self.emit(elem)

    # ── token handlers ──

    def identifier(self):
        text = self.text
        start = self.i
        if self.prev in VALUE_LIKE:
            raise OperatorExpectedError(start)
        name, self.i = scan_identifier(text, start)

        if self.i < len(text) and text[self.i] == '(':
            fn = fn_by_name(name)
            if fn is not None:
                self.ops.append((FN1 if fn.arity == 1 else FN2, fn))
                self.prev = FN
                return

        idx = var_index(self.variables, name)
        if idx is None:
            raise InvalidIdentifierError(start, f"Invalid identifier '{name}'")
        self.emit((VAR, idx))
        self.prev = VALUE

    def number(self):
        if self.prev in VALUE_LIKE:
            raise OperatorExpectedError(self.i)
        value, self.i = scan_number(self.text, self.i)
        self.emit((NUM, value))
        self.prev = VALUE

    def sign(self, c):
        if self.prev in VALUE_LIKE:
            self.binary(c)
            return
        if is_number_start(self.text, self.i + 1):
            self.number()
            return
        if c == '-':
            # Prefix operator: nothing to its left can be reduced yet
            self.ops.append((NEG, None))
            self.prev = NEG
        self.i += 1

    def binary(self, c):
        if self.prev not in VALUE_LIKE:
            raise UnexpectedOperatorError(self.i)
        kind = _BINARY[c]
        self.push_op(kind)
        self.prev = kind
        self.i += 1

    def lparen(self):
        if self.prev in VALUE_LIKE:
            raise OperatorExpectedError(
                self.i, 'Expected operator or function')
        self.ops.append((LPAR, 0))
        self.prev = LPAR
        self.i += 1

    def _check_operand_before(self):
        """``)`` and ``,`` need a complete operand in front of them."""
        if self.prev in (LPAR, SEP):
            raise EmptyParenthesisError(self.i)
        if self.prev in OPERATOR_CLASSES:
            raise UnexpectedOperatorError(
                self.i, 'Expected number, variable or left parenthesis')

    def rparen(self):
        self._check_operand_before()
        self.close_paren(self.i)
        self.prev = RPAR
        self.i += 1

    def comma(self):
        self._check_operand_before()
        self.separator(self.i)
        self.prev = SEP
        self.i += 1

    def end(self):
        if self.prev not in VALUE_LIKE:
            raise UnexpectedEndError(self.i)
        self.drain(self.i)
        self.emit(END_ELEM)

    # ── main loop ──

    def run(self):
        text = self.text
        n = len(text)
        while self.i < n:
            c = text[self.i]
            if c in LETTERS:
                self.identifier()
            elif c in NUMBER_START:
                self.number()
            elif c in '+-':
                self.sign(c)
            elif c in '*/':
                self.binary(c)
            elif c == '(':
                self.lparen()
            elif c == ')':
                self.rparen()
            elif c == ',':
                self.comma()
            elif c in WHITESPACE:
                self.i += 1
            else:
                raise UnexpectedCharacterError(
                    self.i, f"Unexpected character '{c}'")
        self.end()
        return tuple(self.out[:self.n])


def compile_expr(text, variables=()):
    """Compile *text* into a :class:`~expr_calc.program.Program`.

    Args:
        text:      Infix expression, e.g. ``"2*sin(x)+1"``.
        variables: Sequence of :class:`~expr_calc.variables.Variable`
                   the expression may refer to.  Lookup stops at a
                   binding with an empty name.  The program keeps a
                   reference to this sequence, not a copy.

    Returns:
        ``Program``

    Raises:
        ExprError subclass for the first problem found, with ``pos`` set
        to the offending index in *text*.
    """
    try:
        capacity = count_elements(text)
        elems = _Compiler(text, variables, capacity).run()
    except MemoryError:
        raise AllocationError(0) from None
    return Program(variables, max_stack_depth(elems), elems)


