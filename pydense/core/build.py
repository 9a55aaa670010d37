"""
Build-mode switches.

Element bounds checking is a debug-time safety net. It follows the
interpreter's optimisation mode: ``python -O`` sets ``__debug__`` to False
and the checks are skipped, trading safety for speed. The flag is read at
call time, so it can also be flipped for a whole process:

    import pydense.core.build
    pydense.core.build.BOUNDS_CHECK = False

With checks disabled, out-of-range access is undefined: it may alias
another element of the row-major buffer or raise numpy's IndexError.
"""

BOUNDS_CHECK: bool = __debug__
