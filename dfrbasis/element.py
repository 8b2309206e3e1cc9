"""Reference elements: nodal Lagrange triangles and the DFR pairing of a
solution element with a Raviart-Thomas flux element.
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
from pytools import memoize_method

import logging
logger = logging.getLogger(__name__)




class LagrangeElement2D(object):
    """The nodal element of order *N* on the reference triangle.

    .. attribute:: r
    .. attribute:: s

        Node coordinates, see :func:`dfrbasis.nodes.get_nodes`.

    .. attribute:: V
    .. attribute:: Vinv
    .. attribute:: mass_matrix
    .. attribute:: Dr
    .. attribute:: Ds

        Read-only reference operators. Dr and Ds differentiate
        nodal values of polynomials of degree up to *N* exactly.
    """

    @classmethod
    def all_debug_flags(cls):
        return set([
            "check_inverse",
            "help",
            ])

    def __init__(self, N, node_type="hesthaven", debug=set()):
        from dfrbasis.basis import JacobiBasis2D
        from dfrbasis.nodes import get_nodes, node_count
        from dfrbasis.tools import check_debug_flags, check_identity, freeze

        if N < 0:
            raise ValueError("element order must be non-negative, got %d" % N)

        self.debug = check_debug_flags(debug, self.all_debug_flags())

        self.N = N
        self.Np = node_count(N)
        self.node_type = node_type

        self.r, self.s = get_nodes(N, node_type)

        self.jacobi_basis = JacobiBasis2D(N, self.r, self.s)
        self.V = self.jacobi_basis.V
        self.Vinv = self.jacobi_basis.Vinv

        if "check_inverse" in self.debug:
            check_identity(numpy.dot(self.V, self.Vinv),
                    "order %d Vandermonde inverse" % N)

        self.mass_matrix = freeze(numpy.dot(self.Vinv.T, self.Vinv))

        Dr, Ds = self.get_derivative_matrices(self.r, self.s)
        self.Dr = freeze(Dr)
        self.Ds = freeze(Ds)

        logger.debug("built order %d Lagrange element on %s nodes",
                N, node_type)

    def get_derivative_matrices(self, r, s):
        """Return *(Dr, Ds)* mapping nodal values to derivatives at the
        points (*r*, *s*).
        """
        return self.jacobi_basis.get_grad_interp_matrices(r, s)

    def get_interp_matrix(self, r, s):
        return self.jacobi_basis.get_interp_matrix(r, s)

    @memoize_method
    def cubature(self, order=None):
        """Return a :class:`dfrbasis.quadrature.TriangleCubature`, by default
        one that integrates products of two nodal basis functions exactly.
        """
        from dfrbasis.quadrature import get_triangle_cubature
        if order is None:
            order = 2*self.N
        return get_triangle_cubature(order)




class DFRElement2D(object):
    """The reference element pair of Direct Flux Reconstruction at order *N*.

    The solution lives on an order *N* Lagrange element whose nodes lie
    strictly inside the triangle. The flux is reconstructed in an order
    N+1 Raviart-Thomas element whose interior nodes are exactly the
    solution nodes, so solution values feed the flux element without
    interpolation. Only edge values have to be interpolated.

    .. attribute:: solution_element
    .. attribute:: flux_element
    .. attribute:: flux_r
    .. attribute:: flux_s

        All flux element nodes, in DOF order.

    .. attribute:: edge_interp

        Maps solution nodal values to values at the edge nodes of the
        flux element, edges 1, 2, 3 in order.
    """

    def __init__(self, N, rt_basis="ervin", debug=set()):
        from dfrbasis.raviart_thomas import RTElement
        from dfrbasis.tools import freeze

        if N < 0:
            raise ValueError("element order must be non-negative, got %d" % N)

        solution_debug = set(debug) & LagrangeElement2D.all_debug_flags()
        flux_debug = set(debug) - solution_debug

        self.N = N
        self.solution_element = LagrangeElement2D(N, node_type="epsilon",
                debug=solution_debug)
        self.flux_element = RTElement(N+1, basis_type=rt_basis,
                debug=flux_debug)

        sol = self.solution_element
        flux = self.flux_element
        interior = flux.interior_indices(0)
        if (flux.NpInt != sol.Np
                or not numpy.allclose(flux.r[interior], sol.r, atol=1e-14)
                or not numpy.allclose(flux.s[interior], sol.s, atol=1e-14)):
            raise RuntimeError("interior flux nodes of order %d do not "
                    "coincide with the solution nodes" % N)

        self.Np = sol.Np
        self.r = sol.r
        self.s = sol.s
        self.V = sol.V
        self.Vinv = sol.Vinv
        self.Dr = sol.Dr
        self.Ds = sol.Ds

        self.flux_r = flux.r
        self.flux_s = flux.s

        edge_start = 2*flux.NpInt
        self.edge_interp = freeze(sol.get_interp_matrix(
            flux.r[edge_start:], flux.s[edge_start:]))

        logger.debug("built DFR element of order %d: %d solution points, "
                "%d flux dofs", N, self.Np, flux.Np)

    def interpolate_to_edges(self, u):
        """Interpolate solution nodal values *u* to the flux edge nodes."""
        u = numpy.asarray(u, dtype=numpy.float64)
        if u.shape != (self.Np,):
            raise ValueError("expected %d solution values, got shape %s"
                    % (self.Np, u.shape))
        return numpy.dot(self.edge_interp, u)

    def flux_divergence(self, f1, f2):
        """Return the divergence of the reconstructed flux at the solution
        points.

        *f1* and *f2* are the flux components at all flux nodes
        (:attr:`flux_r`, :attr:`flux_s`).
        """
        flux = self.flux_element
        return flux.divergence(f1, f2)[flux.interior_indices(0)]
