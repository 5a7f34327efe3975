"""Math function tables for the expression compiler.

Two closed tables map a function name to its descriptor:

  FN1: one-argument functions  (abs, exp, sin, ...)
  FN2: two-argument functions  (mod, rem, max, min, hypot, pow, atan2)

Each descriptor knows which of its arguments are angles and whether its
result is an angle, so the evaluator can convert between the selected
angle unit and the radians the numpy ufuncs work in.

All implementations take and return float64 scalars and never raise on
domain errors: they produce NaN or +-inf instead, as C libm does.
"""

import math

import numpy as np
import scipy.special


class Function:
    """Descriptor for one built-in function."""
    __slots__ = ('name', 'arity', 'impl', 'angle_in', 'angle_out')

    def __init__(self, name, arity, impl, angle_in=(), angle_out=False):
        self.name = name
        self.arity = arity
        self.impl = impl
        self.angle_in = angle_in    # argument indices that are angles
        self.angle_out = angle_out

    def __call__(self, args, factor=1.0):
        """Apply to *args*, converting angles by *factor* (unit -> radians)."""
        if factor != 1.0:
            args = [a * factor if i in self.angle_in else a
                    for i, a in enumerate(args)]
        res = self.impl(*args)
        if self.angle_out and factor != 1.0:
            res = res / factor
        return res

    def __repr__(self):
        return f"<Function {self.name}/{self.arity}>"


# ── libm functions numpy does not provide ────────────────────────────

def _round(x):
    """C round(): halfway cases away from zero (np.round rounds to even)."""
    r = np.trunc(x)
    if np.abs(x - r) >= 0.5:
        r += np.copysign(1.0, x)
    return r


def _remainder(x, y):
    """IEEE 754 remainder, NaN where libm's remainder() returns NaN."""
    if np.isinf(x) or y == 0 or np.isnan(x) or np.isnan(y):
        return np.float64(np.nan)
    return np.float64(math.remainder(x, y))


def _table(arity, *entries):
    return {e[0]: Function(e[0], arity, *e[1:]) for e in entries}


FN1 = _table(1,
    ('abs',    np.fabs),

    ('exp',    np.exp),
    ('exp2',   np.exp2),
    ('log',    np.log),
    ('log10',  np.log10),

    ('sqrt',   np.sqrt),
    ('cbrt',   np.cbrt),

    ('sin',    np.sin, (0,)),
    ('cos',    np.cos, (0,)),
    ('tan',    np.tan, (0,)),
    ('asin',   np.arcsin, (), True),
    ('acos',   np.arccos, (), True),
    ('atan',   np.arctan, (), True),

    ('sinh',   np.sinh),
    ('cosh',   np.cosh),
    ('tanh',   np.tanh),
    ('asinh',  np.arcsinh),
    ('acosh',  np.arccosh),
    ('atanh',  np.arctanh),

    ('erf',    scipy.special.erf),
    ('erfc',   scipy.special.erfc),
    ('lgamma', scipy.special.gammaln),
    ('tgamma', scipy.special.gamma),

    ('ceil',   np.ceil),
    ('floor',  np.floor),
    ('trunc',  np.trunc),
    ('round',  _round),
)

FN2 = _table(2,
    ('mod',   np.fmod),
    ('rem',   _remainder),
    ('max',   np.fmax),
    ('min',   np.fmin),

    ('hypot', np.hypot),
    ('pow',   np.power),

    ('atan2', np.arctan2, (), True),
)


def fn_by_name(name):
    """Look up *name* in FN1 then FN2; None if it is not a function."""
    return FN1.get(name) or FN2.get(name)
