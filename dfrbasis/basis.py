"""Modal and nodal polynomial bases on the reference triangle and on
the interval.
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




DERIVATIVE_DIRECTIONS = (None, "r", "s")




def _check_derivative(derivative):
    if derivative not in DERIVATIVE_DIRECTIONS:
        raise ValueError("derivative must be one of None, 'r', 's', got %r"
                % (derivative,))




def _as_node_arrays(r, s):
    r = numpy.asarray(r, dtype=numpy.float64)
    s = numpy.asarray(s, dtype=numpy.float64)
    if r.shape != s.shape:
        raise ValueError("mismatched coordinate arrays: %s vs. %s"
                % (r.shape, s.shape))
    return r, s




class JacobiBasis2D(object):
    """The orthonormal simplex basis of order *P* together with its
    Vandermonde matrices at the nodes *(r, s)*.

    .. attribute:: V
    .. attribute:: Vinv
    .. attribute:: Vr
    .. attribute:: Vs

        Read-only. The columns follow
        :func:`dfrbasis.polynomial.simplex_mode_indices`.
    """

    def __init__(self, P, r, s, alpha=0, beta=0):
        from dfrbasis.nodes import node_count
        from dfrbasis.tools import checked_inverse, freeze

        if P < 0:
            raise ValueError("polynomial order must be non-negative, got %d"
                    % P)

        r, s = _as_node_arrays(r, s)
        if r.ndim != 1 or len(r) == 0:
            raise ValueError("need a non-empty one-dimensional node set")

        self.P = P
        self.Np = node_count(P)
        self.alpha = alpha
        self.beta = beta

        if len(r) != self.Np:
            raise ValueError("order %d needs %d nodes, got %d"
                    % (P, self.Np, len(r)))

        from dfrbasis.polynomial import simplex_mode_indices
        self.mode_indices = tuple(simplex_mode_indices(P))

        self.r = freeze(r.copy())
        self.s = freeze(s.copy())

        self.V = freeze(self.vandermonde_2d(P, r, s))
        self.Vinv = freeze(checked_inverse(self.V, "Vandermonde matrix"))
        Vr, Vs = self.grad_vandermonde_2d(P, r, s)
        self.Vr = freeze(Vr)
        self.Vs = freeze(Vs)

        logger.debug("built Jacobi basis of order %d on %d nodes",
                P, self.Np)

    # single modes ------------------------------------------------------------
    def simplex_2d_p(self, r, s, i, j):
        from dfrbasis.polynomial import simplex_2d_p
        return simplex_2d_p(r, s, i, j, self.alpha, self.beta)

    def grad_simplex_2d_p(self, r, s, i, j):
        from dfrbasis.polynomial import grad_simplex_2d_p
        return grad_simplex_2d_p(r, s, i, j, self.alpha, self.beta)

    def polynomial_term(self, r, s, i, j, derivative=None):
        """Evaluate mode (*i*, *j*) or its *derivative* ("r" or
        "s") at (*r*, *s*).
        """
        _check_derivative(derivative)
        if derivative is None:
            return self.simplex_2d_p(r, s, i, j)

        dr, ds = self.grad_simplex_2d_p(r, s, i, j)
        if derivative == "r":
            return dr
        else:
            return ds

    # matrices ----------------------------------------------------------------
    def vandermonde_2d(self, N, r, s):
        from dfrbasis.polynomial import vandermonde_2d
        return vandermonde_2d(N, r, s, self.alpha, self.beta)

    def grad_vandermonde_2d(self, N, r, s):
        from dfrbasis.polynomial import grad_vandermonde_2d
        return grad_vandermonde_2d(N, r, s, self.alpha, self.beta)

    def get_interp_matrix(self, r, s):
        """Return the matrix mapping nodal values to values at (*r*, *s*).

        Each row corresponds to one evaluation point.
        """
        r, s = _as_node_arrays(r, s)
        return numpy.dot(self.vandermonde_2d(self.P, r, s), self.Vinv)

    def get_grad_interp_matrices(self, r, s):
        """Return the matrices mapping nodal values to the r and s
        derivatives at (*r*, *s*).
        """
        r, s = _as_node_arrays(r, s)
        vr, vs = self.grad_vandermonde_2d(self.P, r, s)
        return numpy.dot(vr, self.Vinv), numpy.dot(vs, self.Vinv)

    # sums of modes -----------------------------------------------------------
    def get_polynomial_evaluation(self, r, s, derivative=None):
        """Return the sum of all modes (or their *derivative*) at
        (*r*, *s*).
        """
        return sum(self.polynomial_term(r, s, i, j, derivative)
                for i, j in self.mode_indices)

    def get_all_polynomials(self, derivative=None):
        """Return the sum of all modes (or their *derivative*) at each
        node, i.e. the row sums of :attr:`V`, :attr:`Vr` or :attr:`Vs`.
        """
        _check_derivative(derivative)
        mat = {None: self.V, "r": self.Vr, "s": self.Vs}[derivative]
        return mat.sum(axis=1)

    def get_orthogonal_polynomial_at_j(self, r, s, j, derivative=None):
        """Evaluate the *j*-th nodal (Lagrange) polynomial at (*r*, *s*).

        Column *j* of :attr:`Vinv` holds its coefficients in the
        orthonormal basis, so at the nodes the result is 1 at node *j*
        and 0 elsewhere.
        """
        return sum(
                self.Vinv[m, j]*self.polynomial_term(r, s, i, k, derivative)
                for m, (i, k) in enumerate(self.mode_indices))




class LagrangeBasis1D(object):
    """Lagrange interpolation on the 1D points *nodes*, in barycentric form.
    """

    def __init__(self, nodes):
        nodes = numpy.asarray(nodes, dtype=numpy.float64)
        if nodes.ndim != 1 or len(nodes) == 0:
            raise ValueError("need a non-empty one-dimensional node set")

        diffs = nodes[:, numpy.newaxis] - nodes[numpy.newaxis, :]
        numpy.fill_diagonal(diffs, 1)
        if numpy.any(diffs == 0):
            raise ValueError("Lagrange nodes must be distinct")

        from dfrbasis.tools import freeze
        self.nodes = freeze(nodes.copy())
        self.Np = len(nodes)
        self.weights = freeze(1/numpy.prod(diffs, axis=1))

    def basis_polynomial(self, r, j):
        """Evaluate the *j*-th Lagrange polynomial at the points *r*."""
        r = numpy.asarray(r, dtype=numpy.float64)
        flat_r = r.reshape(-1)

        dist = flat_r - self.nodes[j]
        at_node = numpy.abs(dist) < 1e-10

        result = numpy.ones(flat_r.shape)
        off = flat_r[~at_node]
        prod = numpy.prod(off[:, numpy.newaxis] - self.nodes, axis=1)
        result[~at_node] = prod*self.weights[j]/dist[~at_node]
        return result.reshape(r.shape)

    def basis_derivative(self, r, j):
        """Evaluate the derivative of the *j*-th Lagrange polynomial at the
        points *r*.
        """
        r = numpy.asarray(r, dtype=numpy.float64)
        flat_r = r.reshape(-1)

        others = numpy.delete(self.nodes, j)
        factors = flat_r[:, numpy.newaxis] - others

        result = numpy.zeros(flat_r.shape)
        for m in range(len(others)):
            result += numpy.prod(numpy.delete(factors, m, axis=1), axis=1)
        return (self.weights[j]*result).reshape(r.shape)

    def get_interpolation_matrix(self, r):
        """Return the matrix mapping nodal values to values at the points
        *r*, one row per point.
        """
        r = numpy.asarray(r, dtype=numpy.float64).reshape(-1)
        return numpy.array([
            self.basis_polynomial(r, j) for j in range(self.Np)]).T

    def get_derivative_matrix(self, r):
        """Return the matrix mapping nodal values to derivatives at the
        points *r*, one row per point.
        """
        r = numpy.asarray(r, dtype=numpy.float64).reshape(-1)
        return numpy.array([
            self.basis_derivative(r, j) for j in range(self.Np)]).T

    def interpolate(self, r, f):
        """Interpolate the nodal values *f* to the points *r*."""
        f = numpy.asarray(f, dtype=numpy.float64)
        if len(f) != self.Np:
            raise ValueError("expected %d nodal values, got %d"
                    % (self.Np, len(f)))
        return numpy.dot(self.get_interpolation_matrix(r), f)




class LagrangeBasis2D(object):
    """The nodal basis of order *P* on the triangle that is dual to point
    evaluation at *(r, s)*.
    """

    def __init__(self, P, r, s):
        self.P = P
        self.jacobi_basis = JacobiBasis2D(P, r, s)
        self.Np = self.jacobi_basis.Np
        self.r = self.jacobi_basis.r
        self.s = self.jacobi_basis.s

    def get_interp_matrix(self, r, s):
        return self.jacobi_basis.get_interp_matrix(r, s)

    def get_grad_interp_matrices(self, r, s):
        return self.jacobi_basis.get_grad_interp_matrices(r, s)

    def basis_polynomial(self, r, s, j, derivative=None):
        return self.jacobi_basis.get_orthogonal_polynomial_at_j(
                r, s, j, derivative)

    def interpolate(self, r, s, f):
        """Interpolate the nodal values *f* to the points (*r*, *s*)."""
        f = numpy.asarray(f, dtype=numpy.float64)
        if len(f) != self.Np:
            raise ValueError("expected %d nodal values, got %d"
                    % (self.Np, len(f)))
        return numpy.dot(self.get_interp_matrix(r, s), f)
