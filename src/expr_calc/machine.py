"""Stack machine: depth analysis and evaluation of compiled programs."""

import numpy as np

from .program import END, NUM, NEG, MUL, DIV, ADD, SUB, VAR, FN1, FN2

DEGREES = 'degrees'
RADIANS = 'radians'
GRADIANS = 'gradians'

ANGLE_UNITS = (DEGREES, RADIANS, GRADIANS)

# Multiply an angle in the unit by this to get radians
ANGLE_FACTOR = {
    DEGREES:  np.pi / 180.0,
    RADIANS:  1.0,
    GRADIANS: np.pi / 200.0,
}

_STACK_DELTA = {
    NUM: 1, VAR: 1,
    ADD: -1, SUB: -1, MUL: -1, DIV: -1, FN2: -1,
    NEG: 0, FN1: 0,
}


class EvalContext:
    """Evaluation settings shared by any number of programs."""
    __slots__ = ('_angle_unit',)

    def __init__(self, angle_unit=DEGREES):
        self.angle_unit = angle_unit

    @property
    def angle_unit(self):
        return self._angle_unit

    @angle_unit.setter
    def angle_unit(self, unit):
        if unit not in ANGLE_FACTOR:
            raise ValueError(f"angle_unit must be one of "
                             f"{', '.join(ANGLE_UNITS)}, got {unit!r}")
        self._angle_unit = unit

    @property
    def angle_factor(self):
        return ANGLE_FACTOR[self._angle_unit]


_DEFAULT_CTX = EvalContext()


def max_stack_depth(elems):
    """Deepest the evaluation stack gets while running *elems*.

    Assumes a well-formed program, as produced by the compiler.
    """
    depth = 0
    deepest = 0
    for kind, _ in elems:
        if kind == END:
            break
        depth += _STACK_DELTA[kind]
        if depth > deepest:
            deepest = depth
    return deepest


def evaluate(program, ctx=None):
    """Run *program* and return its value as a float.

    Never raises for a compiled program: division by zero and domain
    errors give +-inf or NaN.

    Args:
        program: :class:`~expr_calc.program.Program` from ``compile_expr``.
        ctx: :class:`EvalContext`; defaults to degrees.
    """
    program.check_alive()

    factor = (ctx or _DEFAULT_CTX).angle_factor
    variables = program.variables
    stack = np.empty(program.stack_depth, dtype=np.float64)
    s = 0

    with np.errstate(all='ignore'):
        for kind, val in program.elems:
            if kind == NUM:
                stack[s] = val
                s += 1
            elif kind == VAR:
                stack[s] = variables[val].value
                s += 1
            elif kind == NEG:
                stack[s - 1] = -stack[s - 1]
            elif kind == ADD:
                s -= 1
                stack[s - 1] += stack[s]
            elif kind == SUB:
                s -= 1
                stack[s - 1] -= stack[s]
            elif kind == MUL:
                s -= 1
                stack[s - 1] *= stack[s]
            elif kind == DIV:
                s -= 1
                stack[s - 1] /= stack[s]
            elif kind == FN1:
                stack[s - 1] = val((stack[s - 1],), factor)
            elif kind == FN2:
                s -= 1
                stack[s - 1] = val((stack[s - 1], stack[s]), factor)
            elif kind == END:
                break

    return float(stack[0])
