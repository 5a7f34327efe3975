"""Human-readable views of programs and errors."""

from .program import END, NUM, NEG, MUL, DIV, ADD, SUB, VAR, FN1, FN2

_OP_NAMES = {
    NEG: '-(1)',
    ADD: '+(2)',
    SUB: '-(2)',
    MUL: '*(2)',
    DIV: '/(2)',
}


def format_number(value):
    """Format a float the way the calculator displays results."""
    return f"{value:.16g}"


def _elem_str(program, kind, val):
    if kind == NUM:
        return format_number(val)
    if kind == VAR:
        return program.variables[val].name
    if kind in (FN1, FN2):
        return f"{val.name}({val.arity})"
    return _OP_NAMES.get(kind, f"invalid type {kind}")


def dump(program):
    """Postfix listing, e.g. ``"1 2 3 *(2) +(2)"`` for ``1+2*3``."""
    program.check_alive()
    return ' '.join(_elem_str(program, kind, val)
                    for kind, val in program.elems if kind != END)


def describe(program):
    """Variables, stack depth and formula, one section each."""
    program.check_alive()
    lines = ['Variables', '---------']
    for var in program.variables or ():
        if not var.name:
            break
        lines.append(f"{var.name} = {format_number(var.value)}")
    lines.append('')
    lines.append(f"Max Stack = {program.stack_depth}")
    lines.append('')
    lines.append('Formula')
    lines.append('-------')
    lines.append(dump(program))
    return '\n'.join(lines)


def format_error(err, text):
    """Render a compile error with the source and a caret under it.

    Renders as::

        4:Unmatched parenthesis
          2*(3
              ^
    """
    shown = text.replace('\t', ' ')  # keep the caret aligned
    return '\n'.join([
        str(err),
        f"  {shown}",
        f"  {' ' * err.pos}^",
    ])
