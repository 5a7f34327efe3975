"""Variable bindings passed to the compiler.

The caller owns the binding sequence.  A compiled program refers to a
binding by its index and reads ``binding.value`` on every evaluation,
so assigning a new value between evaluations needs no recompilation.
"""


class Variable:
    """One named value slot."""
    __slots__ = ('name', 'value')

    def __init__(self, name, value=0.0):
        self.name = name
        self.value = value

    def __repr__(self):
        return f"Variable({self.name!r}, {self.value!r})"


def var_index(variables, name):
    """Index of the first binding called *name*, or None.

    *variables* may be None, which counts as an empty table.

    Lookup stops at the first binding with an empty name, so a
    sentinel-terminated table behaves like a shorter one.
    """
    for i, var in enumerate(variables or ()):
        if not var.name:
            break
        if var.name == name:
            return i
    return None


def var_by_name(variables, name):
    """The binding called *name*, or None."""
    i = var_index(variables, name)
    return None if i is None else variables[i]
