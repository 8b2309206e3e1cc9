"""Miscellaneous helper facilities."""

__copyright__ = "Copyright (C) 2007 Andreas Kloeckner"

__license__ = """
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""





import numpy

import logging
logger = logging.getLogger(__name__)

from dfrbasis.tools.linalg import (  # noqa
        SingularMatrixError, leftsolve, checked_inverse)
from dfrbasis.tools.affine import AffineMap, identify_affine_map  # noqa




# immutable operators ---------------------------------------------------------
def freeze(ary):
    """Mark *ary* read-only and return it."""
    ary = numpy.asarray(ary)
    ary.flags.writeable = False
    return ary




# debug flags -----------------------------------------------------------------
def check_debug_flags(debug, all_flags):
    """Return *debug* as a set, warning about members not in *all_flags*.

    If "help" is among the flags, the available flags are logged.
    """
    debug = set(debug)
    unknown_debug_flags = debug.difference(all_flags)
    if unknown_debug_flags:
        from warnings import warn
        warn("Unrecognized debug flags specified: "
                + ", ".join(sorted(unknown_debug_flags)))

    if "help" in debug:
        logger.info("available debug flags: %s",
                ", ".join(sorted(all_flags)))

    return debug




def check_identity(mat, what, tolerance=1e-10):
    """Warn if *mat* differs from the identity by more than *tolerance*.

    Returns the maximum deviation.
    """
    err = numpy.max(numpy.abs(mat - numpy.eye(len(mat))))
    logger.debug("%s: identity deviation %g", what, err)
    if err > tolerance:
        from warnings import warn
        warn("%s deviates from the identity by %g" % (what, err))
    return err
