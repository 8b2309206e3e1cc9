"""Dense linear algebra helpers."""

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
import numpy.linalg as la

import logging
logger = logging.getLogger(__name__)




class SingularMatrixError(RuntimeError):
    """Raised when a matrix that must be inverted is (numerically) singular.

    This happens for degenerate node sets, e.g. ones with duplicate
    points, for which no unique interpolant exists.
    """




def leftsolve(A, B):
    """Return *X* such that X A = B."""
    return la.solve(A.T, B.T).T




def checked_inverse(mat, what="matrix"):
    """Return the inverse of the square matrix *mat*.

    :raises SingularMatrixError: if *mat* is rank deficient.
    :raises ValueError: if *mat* is not square.
    """
    mat = numpy.asarray(mat, dtype=numpy.float64)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError("%s must be square, got shape %s"
                % (what, mat.shape))

    n = mat.shape[0]
    rank = la.matrix_rank(mat)
    if rank < n:
        raise SingularMatrixError("%s is singular (rank %d < %d)"
                % (what, rank, n))

    try:
        result = la.inv(mat)
    except la.LinAlgError as e:
        raise SingularMatrixError("inverting %s failed: %s" % (what, e)) from e

    logger.debug("inverted %s (%dx%d), condition number %g",
            what, n, n, la.cond(mat))
    return result
