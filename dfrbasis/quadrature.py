"""1D Gauss quadrature for Jacobi polynomials. Cubature on the triangle."""

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
from pytools import memoize

import logging
logger = logging.getLogger(__name__)




MAX_CUBATURE_ORDER = 28




def jacobi_gauss_lobatto_points(alpha, beta, N):
    """Compute the M{N}th order Gauss-Lobatto quadrature
    points, x, associated with the Jacobi polynomial,
    of type (alpha,beta) > -1 ( <> -0.5).
    """

    if N < 1:
        raise ValueError("Gauss-Lobatto points need N >= 1, got %d" % N)

    x = numpy.zeros((N+1,))
    x[0] = -1
    x[-1] = 1

    if N == 1:
        return x

    x[1:-1] = JacobiGaussQuadrature(alpha+1, beta+1, N-2).points
    return x




def legendre_gauss_lobatto_points(N):
    """Compute the M{N}th order Gauss-Lobatto quadrature
    points, x, associated with the Legendre polynomials.
    """
    return jacobi_gauss_lobatto_points(0, 0, N)




class Quadrature(object):
    """An abstract quadrature rule. Its points and weights are read-only."""
    def __init__(self, points, weights):
        from dfrbasis.tools import freeze
        self.weights = freeze(numpy.array(weights, dtype=numpy.float64))
        self.points = freeze(numpy.array(points, dtype=numpy.float64))
        self.data = tuple(zip(self.points, self.weights))

    def __call__(self, f):
        """Integrate the callable f with respect to the given quadrature rule.
        """
        return sum(w*f(x) for x, w in self.data)




class JacobiGaussQuadrature(Quadrature):
    """An M{N}th order Gauss quadrature associated with the Jacobi
    polynomials of type M{(alpha,beta) > -1}

    *alpha* and *beta* may not be -0.5.

    Integrates on the interval (-1,1).
    The quadrature rule is exact up to degree :math:`2*N+1`.
    """
    def __init__(self, alpha, beta, N):
        x, w = self.compute_weights_and_nodes(N, alpha, beta)
        Quadrature.__init__(self, x, w)

    @staticmethod
    def compute_weights_and_nodes(N, alpha, beta):
        """Return (nodes, weights) for an n-th order Gauss quadrature
        with the Jacobi polynomials of type (alpha, beta).
        """
        # follows
        # Gene H. Golub, John H. Welsch, Calculation of Gauss Quadrature Rules,
        # Mathematics of Computation, Vol. 23, No. 106 (Apr., 1969), pp. 221-230
        # doi:10.2307/2004418

        from math import sqrt

        if N < 0:
            raise ValueError("quadrature order must be non-negative, got %d"
                    % N)

        apb = alpha+beta

        # see Appendix A of Hesthaven/Warburton for these formulas
        def a(n):
            return (
                    2/(2*n+apb)
                    *
                    sqrt(
                        (n*(n+apb)*(n+alpha)*(n+beta))
                        /
                        ((2*n+apb-1)*(2*n+apb+1))
                        )
                    )

        def b(n):
            if n == 0:
                return (
                        -(alpha-beta)
                        /
                        (apb+2)
                        )
            else:
                return (
                        -(alpha**2-beta**2)
                        /
                        ((2*n+apb)*(2*n+apb+2))
                        )

        T = numpy.zeros((N+1, N+1))

        for n in range(N+1):
            T[n, n] = b(n)
            if n < N:
                T[n, n+1] = T[n+1, n] = a(n+1)

        eigval, eigvec = numpy.linalg.eigh(T)

        from dfrbasis.polynomial import JacobiFunction
        p0 = JacobiFunction(alpha, beta, 0)
        nodes = eigval
        weights = eigvec[0]**2 / p0(nodes)**2

        return nodes, weights




class LegendreGaussQuadrature(JacobiGaussQuadrature):
    """An M{N}th order Gauss quadrature associated with the Legendre polynomials.
    """
    def __init__(self, N):
        JacobiGaussQuadrature.__init__(self, 0, 0, N)




class TriangleCubature(Quadrature):
    """A cubature rule on the reference triangle with vertices
    (-1,-1), (1,-1), (-1,1), exact for polynomials up to degree *order*.

    This is a Stroud conical product rule: a Gauss-Jacobi rule of type
    (1,0) in the collapsed direction absorbs the Jacobian of the
    collapse, and a Gauss-Legendre rule covers the other direction.
    All weights are positive and all points are strictly interior.

    .. attribute:: r
    .. attribute:: s
    .. attribute:: w

        Read-only arrays of point coordinates and weights.
    """

    def __init__(self, order):
        if order < 0:
            raise ValueError("cubature order must be non-negative, got %d"
                    % order)

        from math import ceil
        n = int(ceil((order+1)/2))

        quad_a = LegendreGaussQuadrature(n-1)
        quad_b = JacobiGaussQuadrature(1, 0, n-1)

        a = numpy.outer(numpy.ones(n), quad_a.points)
        b = numpy.outer(quad_b.points, numpy.ones(n))

        from dfrbasis.tools import freeze
        self.r = freeze((0.5*(1+a)*(1-b) - 1).ravel())
        self.s = freeze(b.ravel().copy())
        self.w = freeze((0.5*numpy.outer(quad_b.weights, quad_a.weights)).ravel())

        self.exact_to = order

        Quadrature.__init__(self,
                numpy.column_stack((self.r, self.s)), self.w)

    def integrate(self, values):
        """Integrate from point *values* given in the order of :attr:`r`."""
        return numpy.dot(self.w, values)




@memoize
def _get_triangle_cubature_table_entry(order):
    cub = TriangleCubature(order)
    logger.debug("built triangle cubature of order %d with %d points",
            order, len(cub.w))
    return cub




def get_triangle_cubature(order):
    """Return the :class:`TriangleCubature` integrating polynomials up to
    degree *order* on the reference triangle.

    Orders above :data:`MAX_CUBATURE_ORDER` are clipped to it, with a
    warning. Rules are built on first request and shared afterwards.
    """
    if order < 0:
        raise ValueError("cubature order must be non-negative, got %d"
                % order)

    if order > MAX_CUBATURE_ORDER:
        from warnings import warn
        warn("cubature order %d exceeds the supported maximum, "
                "clipping to %d" % (order, MAX_CUBATURE_ORDER))
        order = MAX_CUBATURE_ORDER

    return _get_triangle_cubature_table_entry(order)
