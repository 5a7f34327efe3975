"""calc CLI: a scientific calculator on top of the expression compiler.

Usage:
    calc '1+2*3'                          Evaluate, print 7
    calc -u radians 'sin(pi/2)'           Pick the angle unit
    calc -s A '2*3' 'A+1'                 Store each result into A
    calc -D x=2.5 'x*x'                   Define a variable
    calc                                  Read expressions from stdin

Interactive commands (stdin mode):
    :unit degrees|radians|gradians        Switch angle unit
    :sto A                                Store last result into A
    :vars                                 List variables
    :dump                                 Toggle program listing
    :quit                                 Leave
"""

import argparse
import re
import sys

import numpy as np

from .errors import ExprError
from .variables import Variable, var_by_name
from .machine import ANGLE_UNITS, DEGREES, EvalContext, evaluate
from .compiler import compile_expr
from .program import destroy
from .diagnostics import describe, format_error, format_number

MEMORY_SLOTS = 'ABCDEFGH'

_RE_DEFINE = re.compile(r'^([A-Za-z][A-Za-z0-9]*)=(.+)$')


def default_variables():
    """Memory slots A-H, the last result and the usual constants."""
    variables = [Variable(name) for name in MEMORY_SLOTS]
    variables.append(Variable('ans'))
    variables.append(Variable('pi', float(np.pi)))
    variables.append(Variable('e', float(np.e)))
    return variables


def _parse_define(parser, define):
    """Parse ``NAME=VALUE`` from -D."""
    m = _RE_DEFINE.match(define)
    if not m:
        parser.error(f"-D expects NAME=VALUE, got {define!r}")
    try:
        return m.group(1), float(m.group(2))
    except ValueError:
        parser.error(f"-D {m.group(1)}: not a number: {m.group(2)!r}")


class Session:
    """Calculator state: variables, angle unit, last result."""

    def __init__(self, variables, angle_unit=DEGREES, store=None,
                 show_program=False, out=None, err=None):
        self.variables = variables
        self.ctx = EvalContext(angle_unit)
        self.store = store
        self.show_program = show_program
        self.last = 0.0
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def set_var(self, name, value):
        var = var_by_name(self.variables, name)
        if var is None:
            self.variables.append(Variable(name, value))
        else:
            var.value = value

    def calc(self, text):
        """Compile and evaluate one expression.  Returns True on success."""
        try:
            prog = compile_expr(text, self.variables)
        except ExprError as e:
            print(format_error(e, text), file=self.err)
            return False

        if self.show_program:
            print(describe(prog), file=self.out)
            print(file=self.out)

        self.last = evaluate(prog, self.ctx)
        destroy(prog)

        self.set_var('ans', self.last)
        if self.store:
            self.set_var(self.store, self.last)
        print(format_number(self.last), file=self.out)
        return True

    def command(self, line):
        """Handle a ``:command`` line.  Returns False to stop reading."""
        words = line[1:].split()
        cmd = words[0] if words else ''
        arg = words[1] if len(words) > 1 else None

        if cmd in ('q', 'quit'):
            return False
        if cmd == 'unit':
            if arg not in ANGLE_UNITS:
                print(f"Unit must be one of {', '.join(ANGLE_UNITS)}",
                      file=self.err)
            else:
                self.ctx.angle_unit = arg
                print(f"Angle unit: {arg}", file=self.out)
        elif cmd == 'sto':
            if not arg or arg not in tuple(MEMORY_SLOTS):
                print(f"Store into one of {', '.join(MEMORY_SLOTS)}",
                      file=self.err)
            else:
                self.set_var(arg, self.last)
                print(f"{arg} = {format_number(self.last)}", file=self.out)
        elif cmd == 'vars':
            for var in self.variables:
                print(f"{var.name} = {format_number(var.value)}",
                      file=self.out)
        elif cmd == 'dump':
            self.show_program = not self.show_program
            print(f"Program listing {'on' if self.show_program else 'off'}",
                  file=self.out)
        else:
            print(f"Unknown command ':{cmd}'", file=self.err)
        return True

    def repl(self, stream, interactive=False):
        """Evaluate lines from *stream*.  Returns True if all succeeded."""
        ok = True
        while True:
            if interactive:
                print('> ', end='', file=self.out, flush=True)
            line = stream.readline()
            if not line:
                break
            line = line.strip()
            if not line:
                continue
            if line.startswith(':'):
                if not self.command(line):
                    break
                continue
            ok = self.calc(line) and ok
        return ok


def main(argv=None, stdin=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='calc',
        description='Evaluate arithmetic expressions.',
        epilog="""Examples:
  calc '1+2*3'                      7
  calc -u radians 'atan2(1,1)*4'    pi
  calc -s A '2*3' 'A*A'             6, then 36
  calc -D r=2 'pi*pow(r,2)'         area of a circle""",
        formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument('expr', nargs='*',
                        help='Expressions to evaluate (default: read stdin)')
    parser.add_argument('-u', '--unit', choices=ANGLE_UNITS, default=DEGREES,
                        help='Angle unit for trigonometric functions '
                             '(default: degrees)')
    parser.add_argument('-D', '--define', action='append', default=[],
                        metavar='NAME=VALUE',
                        help='Define or override a variable (repeatable)')
    parser.add_argument('-s', '--store', choices=list(MEMORY_SLOTS),
                        default=None,
                        help='Store every result into this memory slot')
    parser.add_argument('-d', '--dump', action='store_true',
                        help='Print the compiled program before each result')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show tracebacks on unexpected errors')

    args = parser.parse_args(argv)
    defines = [_parse_define(parser, d) for d in args.define]

    try:
        return run(args, defines, stdin)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"\nUnexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2


def run(args, defines=(), stdin=None) -> int:
    """Evaluate the expressions from *args* or from stdin."""
    session = Session(default_variables(), angle_unit=args.unit,
                      store=args.store, show_program=args.dump)
    for name, value in defines:
        session.set_var(name, value)

    if args.expr:
        ok = True
        for text in args.expr:
            ok = session.calc(text) and ok
    else:
        stream = stdin or sys.stdin
        ok = session.repl(stream, interactive=stream.isatty())

    return 0 if ok else 1
