"""Interpolation node sets on the reference triangle.

Two coordinate systems are in use. The unit (reference) triangle has
vertices (-1,-1), (1,-1), (-1,1)::

    ^ s
    |
    C
    |\\
    | \\
    |  \\
    |   \\
    |    \\
    A-----B--> r

The equilateral triangle is centered at the origin with vertices
(-1,-1/sqrt 3), (1,-1/sqrt 3) and (0,2/sqrt 3); warp-and-blend nodes are
constructed there and then mapped to the unit triangle by
:func:`xy_to_rs`.
"""

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




HESTHAVEN = "hesthaven"
EPSILON = "epsilon"

NODE_TYPES = (HESTHAVEN, EPSILON)

# optimized blending parameters for N = 1..15,
# Hesthaven/Warburton, Table 6.1
ALPHA_OPT = (0.0000, 0.0000, 1.4152, 0.1001, 0.2751, 0.9800, 1.0999,
        1.2832, 1.3648, 1.4773, 1.4959, 1.5743, 1.5770, 1.6223, 1.6258)

EQUILATERAL_VERTICES = [(-1, -1/numpy.sqrt(3)), (1, -1/numpy.sqrt(3)),
        (0, 2/numpy.sqrt(3))]
UNIT_VERTICES = [(-1, -1), (1, -1), (-1, 1)]




def node_count(N):
    return (N+1)*(N+2)//2




def equidistant_barycentric_nodes(N):
    """Generate equidistant barycentric triples (L1, L2, L3) of order *N*.

    L1 grows towards the top vertex and L3 towards the right vertex.
    """
    for n in range(N+1):
        for m in range(N+1-n):
            lambda1 = n/N
            lambda3 = m/N
            yield lambda1, 1-lambda1-lambda3, lambda3




class WarpFactorCalculator:
    """Calculator for Warburton's warp factor.

    See T. Warburton,
    "An explicit construction of interpolation nodes on the simplex"
    Journal of Engineering Mathematics Vol 56, No 3, p. 247-262, 2006
    """

    def __init__(self, N):
        from dfrbasis.quadrature import legendre_gauss_lobatto_points
        from dfrbasis.polynomial import legendre_vandermonde

        # Find lgl and equidistant interpolation points
        r_lgl = legendre_gauss_lobatto_points(N)
        r_eq = numpy.linspace(-1, 1, N+1)

        self.N = N
        self.coefficients = numpy.linalg.solve(
                legendre_vandermonde(r_eq, N), r_lgl - r_eq)

    def int_f(self, x):
        """Evaluate the interpolant of the LGL-equidistant displacement."""
        from dfrbasis.polynomial import legendre_vandermonde

        x = numpy.asarray(x, dtype=numpy.float64)
        return numpy.dot(
                legendre_vandermonde(x.reshape(-1), self.N),
                self.coefficients).reshape(x.shape)

    def __call__(self, x):
        x = numpy.asarray(x, dtype=numpy.float64)
        flat_x = x.reshape(-1)

        result = numpy.zeros(flat_x.shape)
        inside = numpy.abs(flat_x) < 1-1e-10
        result[inside] = self.int_f(flat_x[inside])/(1-flat_x[inside]**2)
        return result.reshape(x.shape)




def nodes_2d(N):
    """Return the warp-and-blend nodes *(x, y)* of order *N* on the
    equilateral triangle.
    """
    from math import sqrt, sin, cos, pi

    if N < 0:
        raise ValueError("node order must be non-negative, got %d" % N)

    if N == 0:
        return numpy.zeros(1), numpy.zeros(1)

    try:
        alpha = ALPHA_OPT[N-1]
    except IndexError:
        alpha = 5/3

    L1, L2, L3 = numpy.array(list(equidistant_barycentric_nodes(N))).T

    # equidistant (x,y) coordinates in the equilateral triangle
    x = -L2 + L3
    y = (-L2 - L3 + 2*L1)/sqrt(3)

    # blend factors, nonzero on one edge each
    blend1 = 4*L2*L3
    blend2 = 4*L1*L3
    blend3 = 4*L1*L2

    warp = WarpFactorCalculator(N)
    warp1 = blend1*warp(L3 - L2)*(1 + (alpha*L1)**2)
    warp2 = blend2*warp(L1 - L3)*(1 + (alpha*L2)**2)
    warp3 = blend3*warp(L2 - L1)*(1 + (alpha*L3)**2)

    x = x + warp1 + cos(2*pi/3)*warp2 + cos(4*pi/3)*warp3
    y = y + sin(2*pi/3)*warp2 + sin(4*pi/3)*warp3

    return x, y




def xy_to_rs(x, y):
    """Map equilateral triangle coordinates to the unit triangle."""
    from math import sqrt

    x = numpy.asarray(x, dtype=numpy.float64)
    y = numpy.asarray(y, dtype=numpy.float64)

    L1 = (sqrt(3)*y + 1)/3
    L2 = (-3*x - sqrt(3)*y + 2)/6
    L3 = (3*x - sqrt(3)*y + 2)/6

    r = -L2 + L3 - L1
    s = -L2 - L3 + L1
    return r, s




def equilateral_to_unit_map():
    """Return the :class:`dfrbasis.tools.AffineMap` that agrees with
    :func:`xy_to_rs`.
    """
    from dfrbasis.tools import identify_affine_map
    return identify_affine_map(
            [numpy.array(v) for v in EQUILATERAL_VERTICES],
            [numpy.array(v, dtype=numpy.float64) for v in UNIT_VERTICES])




def nodes_epsilon(N):
    """Return *(r, s)* for (N+1)(N+2)/2 nodes strictly inside the unit
    triangle.

    These are the interior nodes of the warp-and-blend set of order N+3,
    which has exactly the right number of them. Order 0 yields the
    centroid.
    """
    if N < 0:
        raise ValueError("node order must be non-negative, got %d" % N)

    M = N+3
    x, y = nodes_2d(M)

    interior = numpy.array([
        0 < n < M and 0 < m < M-n
        for n in range(M+1)
        for m in range(M+1-n)])

    r, s = xy_to_rs(x[interior], y[interior])
    if len(r) != node_count(N):
        raise RuntimeError("order %d epsilon node set has %d points, "
                "expected %d" % (N, len(r), node_count(N)))
    return r, s




def get_nodes(N, node_type=HESTHAVEN):
    """Return read-only arrays *(r, s)* of the order-*N* nodes of the given
    *node_type*, one of :data:`NODE_TYPES`.
    """
    if N < 0:
        raise ValueError("node order must be non-negative, got %d" % N)

    if node_type == HESTHAVEN:
        r, s = xy_to_rs(*nodes_2d(N))
    elif node_type == EPSILON:
        r, s = nodes_epsilon(N)
    else:
        raise ValueError("unknown node type '%s', expected one of %s"
                % (node_type, ", ".join(NODE_TYPES)))

    logger.debug("generated %d %s nodes of order %d", len(r), node_type, N)

    from dfrbasis.tools import freeze
    return freeze(r), freeze(s)
