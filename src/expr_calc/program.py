"""Compiled program representation.

A program is a flat postfix sequence of ``(kind, payload)`` elements:

    ====  ==========================  =================
    kind  meaning                     payload
    ====  ==========================  =================
    NUM   push literal                float
    VAR   push variable value         binding index
    NEG   negate top                  None
    ADD   pop b, a; push a + b        None
    SUB   pop b, a; push a - b        None
    MUL   pop b, a; push a * b        None
    DIV   pop b, a; push a / b        None
    FN1   replace top with f(top)     Function
    FN2   pop b, a; push f(a, b)      Function
    END   end of program              None
    ====  ==========================  =================
"""

END = 'end'
NUM = 'num'
NEG = 'neg'
MUL = 'mul'
DIV = 'div'
ADD = 'add'
SUB = 'sub'
VAR = 'var'
FN1 = 'fn1'
FN2 = 'fn2'

END_ELEM = (END, None)


class Program:
    """Compiled expression, ready for :func:`~expr_calc.machine.evaluate`.

    ``variables`` is the caller's binding sequence the program was
    compiled against; it is borrowed, not copied, and must stay alive
    for as long as the program is evaluated.
    """
    __slots__ = ('variables', 'stack_depth', 'elems')

    def __init__(self, variables, stack_depth, elems):
        self.variables = variables
        self.stack_depth = stack_depth
        self.elems = elems

    @property
    def destroyed(self):
        return self.elems is None

    def check_alive(self):
        if self.destroyed:
            raise ValueError("Program has been destroyed")

    def __len__(self):
        """Number of instructions, end sentinel excluded."""
        self.check_alive()
        return len(self.elems) - 1

    def __repr__(self):
        if self.destroyed:
            return '<Program destroyed>'
        return f"<Program {len(self)} elems, stack {self.stack_depth}>"


def destroy(program):
    """Release the program's element storage.

    The variable table is left alone; it belongs to the caller.
    """
    program.elems = None
    program.variables = None
