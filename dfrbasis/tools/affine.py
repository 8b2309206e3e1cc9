"""Affine maps."""

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




class AffineMap(object):
    """The map ``x -> A x + b``."""

    def __init__(self, matrix, vector):
        self.matrix = numpy.asarray(matrix, dtype=numpy.float64)
        self.vector = numpy.asarray(vector, dtype=numpy.float64)

    def __call__(self, x):
        """Apply the map to *x*, whose first axis is the coordinate axis.

        Any further axes are treated as point indices, so that a
        (dim, npoints) array maps all points at once.
        """
        x = numpy.asarray(x, dtype=numpy.float64)
        extra_axes = (numpy.newaxis,)*(x.ndim-1)
        return (numpy.tensordot(self.matrix, x, axes=(1, 0))
                + self.vector[(slice(None),) + extra_axes])

    def jacobian(self):
        return numpy.linalg.det(self.matrix)

    def inverted(self):
        inv_matrix = numpy.linalg.inv(self.matrix)
        return AffineMap(inv_matrix, -numpy.dot(inv_matrix, self.vector))




def identify_affine_map(from_points, to_points):
    """Return an affine map that maps *from_points[i]* to *to_points[i]*.
    For an n-dimensional affine map, n+1 points are needed.
    """

    from pytools import single_valued
    dim = single_valued([
        single_valued(len(fp) for fp in from_points),
        single_valued(len(tp) for tp in to_points)])

    if len(from_points) != dim+1 or len(to_points) != dim+1:
        raise ValueError("need dim+1 points to identify an affine map")

    # columns contain points
    x_mat = numpy.array(from_points, dtype=numpy.float64).T
    y_mat = numpy.array(to_points, dtype=numpy.float64).T

    # subtracting consecutive equations a*x_i + b = y_i eliminates b
    xdiff_mat = (x_mat - numpy.roll(x_mat, -1, axis=1))[:, :dim]
    ydiff_mat = (y_mat - numpy.roll(y_mat, -1, axis=1))[:, :dim]

    from dfrbasis.tools.linalg import leftsolve
    a = leftsolve(xdiff_mat, ydiff_mat)
    b = y_mat[:, 0] - numpy.dot(a, x_mat[:, 0])

    return AffineMap(a, b)
