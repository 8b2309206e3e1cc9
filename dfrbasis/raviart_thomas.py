"""Raviart-Thomas vector elements on the reference triangle.

The element of order *P* has (P+1)(P+3) degrees of freedom, laid out as::

    [ interior r-hat | interior s-hat | edge 1 | edge 2 | edge 3 ]

with P(P+1)/2 interior nodes (shared by both interior blocks) and P+1
Gauss-Legendre nodes per edge. Edges are numbered counterclockwise::

    ^ s
    |
    o
    |\\
    | \\
  3 |  \\ 2
    |   \\
    o----o--> r
       1

Edge 1 (bottom, s=-1) is traversed left to right, edge 2 (hypotenuse)
right to left in r, edge 3 (left, r=-1) top to bottom. Neighboring
elements rely on this point order along shared edges.

A degree of freedom is the value of the field at its node, dotted with
the node's reference direction: r-hat or s-hat in the interior, the
outward unit normal on the edges. The nodal basis is obtained from any
spanning set of RT_P by inverting the matrix of these functionals.
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




from math import sqrt

import numpy

import logging
logger = logging.getLogger(__name__)




EDGE_NUMBERS = (1, 2, 3)

EDGE_NORMALS = {
        1: (0., -1.),
        2: (1/sqrt(2), 1/sqrt(2)),
        3: (-1., 0.),
        }

# derivative of the edge coordinate xi with respect to (r, s)
EDGE_XI_GRADIENTS = {
        1: (1., 0.),
        2: (0., 1.),
        3: (0., -1.),
        }




def _check_edge(edge):
    if edge not in EDGE_NUMBERS:
        raise ValueError("edges are numbered 1, 2, 3; got %r" % (edge,))




def _coordinates(r, s):
    r = numpy.asarray(r, dtype=numpy.float64)
    s = numpy.asarray(s, dtype=numpy.float64)
    return numpy.broadcast_arrays(r, s)




def edge_xi(edge, r, s):
    """Return the edge coordinate xi of the points (*r*, *s*) on *edge*:
    xi = r on edge 1, s on edge 2, -s on edge 3.
    """
    _check_edge(edge)
    r, s = _coordinates(r, s)
    if edge == 1:
        return r.copy()
    elif edge == 2:
        return s.copy()
    else:
        return -s




def edge_points(edge, xi):
    """Return (r, s) of the points with edge coordinate *xi* on *edge*."""
    _check_edge(edge)
    xi = numpy.asarray(xi, dtype=numpy.float64)
    ones = numpy.ones(xi.shape)
    if edge == 1:
        return xi.copy(), -ones
    elif edge == 2:
        return -xi, xi.copy()
    else:
        return -ones, -xi




# basis vectors ---------------------------------------------------------------
class BasisVector(object):
    """A vector field on the reference triangle.

    Subclasses provide :meth:`eval`, :meth:`divergence` and
    :meth:`jacobian`. Vector-valued results carry the component axis
    first, followed by the shape of the (broadcast) point arrays.
    """

    def eval(self, r, s):
        raise NotImplementedError

    def divergence(self, r, s):
        raise NotImplementedError

    def jacobian(self, r, s):
        """Return *J* with J[a, b] the derivative of component *a*
        with respect to coordinate *b* (0 = r, 1 = s).
        """
        raise NotImplementedError

    def dot(self, r, s, f):
        v = self.eval(r, s)
        return v[0]*f[0] + v[1]*f[1]

    def project(self, r, s, scale):
        return scale*self.eval(r, s)




class ConstantVector(BasisVector):
    def __init__(self, vr, vs):
        self.value = (vr, vs)

    def __repr__(self):
        return "ConstantVector%r" % (self.value,)

    def eval(self, r, s):
        r, s = _coordinates(r, s)
        return numpy.array([
            numpy.full(r.shape, self.value[0]),
            numpy.full(r.shape, self.value[1])])

    def divergence(self, r, s):
        r, s = _coordinates(r, s)
        return numpy.zeros(r.shape)

    def jacobian(self, r, s):
        r, s = _coordinates(r, s)
        return numpy.zeros((2, 2) + r.shape)




class AffineVectorField(BasisVector):
    """The field v(x) = A x + b given by an
    :class:`dfrbasis.tools.AffineMap`.
    """

    def __init__(self, affine_map):
        self.map = affine_map

    def eval(self, r, s):
        r, s = _coordinates(r, s)
        return self.map(numpy.array([r, s]))

    def divergence(self, r, s):
        r, s = _coordinates(r, s)
        return numpy.full(r.shape, numpy.trace(self.map.matrix))

    def jacobian(self, r, s):
        r, s = _coordinates(r, s)
        mat = self.map.matrix.reshape((2, 2) + (1,)*r.ndim)
        return mat * numpy.ones((2, 2) + r.shape)




def ervin_edge_vector(edge):
    """Return the lowest order RT field of *edge*. Its normal component is 1
    on *edge* and 0 on the other two edges.
    """
    from dfrbasis.tools import AffineMap

    _check_edge(edge)
    if edge == 1:
        return AffineVectorField(AffineMap(0.5*numpy.eye(2), [0.5, -0.5]))
    elif edge == 2:
        c = sqrt(2)/2
        return AffineVectorField(AffineMap(c*numpy.eye(2), [c, c]))
    else:
        return AffineVectorField(AffineMap(0.5*numpy.eye(2), [-0.5, 0.5]))




def position_vector():
    from dfrbasis.tools import AffineMap
    return AffineVectorField(AffineMap(numpy.eye(2), numpy.zeros(2)))




class ErvinInteriorVector(BasisVector):
    """Interior vector fields with vanishing normal component on all edges.

    With xi = (r+1)/2 and eta = (s+1)/2, *kind* 4 is
    eta*(xi, eta-1) and *kind* 5 is xi*(xi-1, eta).

    See V. J. Ervin, "Computational bases for RT_k and BDM_k on triangles",
    Computers & Mathematics with Applications 64 (2012), 2765-2774.
    """

    def __init__(self, kind):
        if kind not in (4, 5):
            raise ValueError("interior vector kind must be 4 or 5, got %r"
                    % (kind,))
        self.kind = kind

    def __repr__(self):
        return "ErvinInteriorVector(%d)" % self.kind

    def eval(self, r, s):
        r, s = _coordinates(r, s)
        xi = 0.5*(r+1)
        eta = 0.5*(s+1)
        if self.kind == 4:
            return numpy.array([eta*xi, eta*(eta-1)])
        else:
            return numpy.array([xi*(xi-1), xi*eta])

    def divergence(self, r, s):
        r, s = _coordinates(r, s)
        if self.kind == 4:
            return 0.5*(3*0.5*(s+1) - 1)
        else:
            return 0.5*(3*0.5*(r+1) - 1)

    def jacobian(self, r, s):
        r, s = _coordinates(r, s)
        xi = 0.5*(r+1)
        eta = 0.5*(s+1)
        zero = numpy.zeros(r.shape)
        if self.kind == 4:
            return numpy.array([
                [0.5*eta, 0.5*xi],
                [zero, 0.5*(2*eta-1)]])
        else:
            return numpy.array([
                [0.5*(2*xi-1), zero],
                [0.5*eta, 0.5*xi]])




# polynomial multipliers ------------------------------------------------------
class OrthogonalModeMultiplier(object):
    """Mode (*i*, *j*) of the orthonormal simplex basis."""

    def __init__(self, i, j):
        self.i = i
        self.j = j

    def eval(self, r, s):
        from dfrbasis.polynomial import simplex_2d_p
        r, s = _coordinates(r, s)
        return simplex_2d_p(r, s, self.i, self.j)

    def gradient(self, r, s):
        from dfrbasis.polynomial import grad_simplex_2d_p
        r, s = _coordinates(r, s)
        return numpy.array(grad_simplex_2d_p(r, s, self.i, self.j))




class EdgeLagrangeMultiplier(object):
    """The *j*-th 1D Lagrange polynomial of *lagrange_basis*, evaluated in
    the coordinate xi of *edge*.
    """

    def __init__(self, lagrange_basis, j, edge):
        _check_edge(edge)
        self.lagrange_basis = lagrange_basis
        self.j = j
        self.edge = edge

    def eval(self, r, s):
        return self.lagrange_basis.basis_polynomial(
                edge_xi(self.edge, r, s), self.j)

    def gradient(self, r, s):
        dl = self.lagrange_basis.basis_derivative(
                edge_xi(self.edge, r, s), self.j)
        dxi_dr, dxi_ds = EDGE_XI_GRADIENTS[self.edge]
        return numpy.array([dl*dxi_dr, dl*dxi_ds])




class MonomialMultiplier(object):
    """The monomial r**p * s**q."""

    def __init__(self, p, q):
        self.p = p
        self.q = q

    def eval(self, r, s):
        r, s = _coordinates(r, s)
        return r**self.p * s**self.q

    def gradient(self, r, s):
        r, s = _coordinates(r, s)
        p, q = self.p, self.q
        zero = numpy.zeros(r.shape)
        dr = p*r**(p-1) * s**q if p > 0 else zero
        ds = q*r**p * s**(q-1) if q > 0 else zero
        return numpy.array([dr, ds])




class BasisPolynomialTerm(object):
    """The vector field *multiplier* times *vector*."""

    def __init__(self, multiplier, vector):
        self.multiplier = multiplier
        self.vector = vector

    def eval(self, r, s):
        return self.multiplier.eval(r, s)*self.vector.eval(r, s)

    def dot(self, r, s, f):
        v = self.eval(r, s)
        return v[0]*f[0] + v[1]*f[1]

    def project(self, r, s, scale):
        return scale*self.eval(r, s)

    def divergence(self, r, s):
        # div(p v) = grad p . v + p div v
        p = self.multiplier.eval(r, s)
        grad_p = self.multiplier.gradient(r, s)
        v = self.vector.eval(r, s)
        return (grad_p[0]*v[0] + grad_p[1]*v[1]
                + p*self.vector.divergence(r, s))

    def jacobian(self, r, s):
        p = self.multiplier.eval(r, s)
        grad_p = self.multiplier.gradient(r, s)
        v = self.vector.eval(r, s)
        outer = v[:, numpy.newaxis]*grad_p[numpy.newaxis, :]
        return outer + p*self.vector.jacobian(r, s)




# basis families --------------------------------------------------------------
class ErvinRTBasis(object):
    """Spans RT_P by P+1 Lagrange-weighted lowest order fields per edge
    and orthonormal modes of order P-1 times the two interior fields.

    The interior functions have zero normal component on the boundary
    and each edge function has normal component only on its own edge.
    """

    name = "ervin"

    def __init__(self, P, edge_xi_nodes):
        from dfrbasis.basis import LagrangeBasis1D
        from dfrbasis.polynomial import simplex_mode_indices

        self.P = P
        self.interior_vectors = (ErvinInteriorVector(4), ErvinInteriorVector(5))

        phi = []
        if P > 0:
            for vector in self.interior_vectors:
                for i, j in simplex_mode_indices(P-1):
                    phi.append(BasisPolynomialTerm(
                        OrthogonalModeMultiplier(i, j), vector))

        edge_lagrange = LagrangeBasis1D(edge_xi_nodes)
        for edge in EDGE_NUMBERS:
            vector = ervin_edge_vector(edge)
            for j in range(len(edge_xi_nodes)):
                phi.append(BasisPolynomialTerm(
                    EdgeLagrangeMultiplier(edge_lagrange, j, edge), vector))

        self.phi = phi




class RomeroJamesonRTBasis(object):
    """Spans RT_P as (P_P)^2 + x * homogeneous(P_P): orthonormal modes of
    order P times r-hat and s-hat, plus r**(P-k) s**k times the position
    vector for k = 0..P.

    See P. Romero, F. Witherden, A. Jameson, "A direct flux reconstruction
    scheme for advection-diffusion problems on triangular grids",
    J. Sci. Comput. 73 (2017), 1115-1144.
    """

    name = "romero-jameson"

    def __init__(self, P, edge_xi_nodes):
        from dfrbasis.polynomial import simplex_mode_indices

        self.P = P
        self.interior_vectors = (ConstantVector(1., 0.), ConstantVector(0., 1.))

        phi = []
        for vector in self.interior_vectors:
            for i, j in simplex_mode_indices(P):
                phi.append(BasisPolynomialTerm(
                    OrthogonalModeMultiplier(i, j), vector))

        x = position_vector()
        for k in range(P+1):
            phi.append(BasisPolynomialTerm(MonomialMultiplier(P-k, k), x))

        self.phi = phi




RT_BASIS_FAMILIES = {
        ErvinRTBasis.name: ErvinRTBasis,
        RomeroJamesonRTBasis.name: RomeroJamesonRTBasis,
        }




# the element -----------------------------------------------------------------
class RTElement(object):
    """A Raviart-Thomas element of order *P* with a nodal (dual) basis.

    .. attribute:: r
    .. attribute:: s

        Node coordinates, in DOF order.

    .. attribute:: directions

        An (Np, 2) array of the reference direction of each DOF.

    .. attribute:: V1
    .. attribute:: V2

        V1[i, k] and V2[i, k] are the r and s components of
        nodal basis function *k* at node *i*.

    .. attribute:: Dr1
    .. attribute:: Ds1
    .. attribute:: Dr2
    .. attribute:: Ds2

        Derivatives of the components, e.g. Ds1 is d/ds of the
        r component.

    .. attribute:: Div

        The divergence of each nodal basis function at each node. Applied
        to the output of :meth:`project_function_onto_dof`, it yields the
        divergence of the interpolated field at the nodes.

    All matrices are read-only.
    """

    @classmethod
    def all_debug_flags(cls):
        return set([
            "check_duality",
            "help",
            ])

    def __init__(self, P, basis_type=ErvinRTBasis.name, debug=set()):
        from dfrbasis.tools import (
                check_debug_flags, check_identity, checked_inverse, freeze)

        if P < 0:
            raise ValueError("RT element order must be non-negative, got %d"
                    % P)
        try:
            family = RT_BASIS_FAMILIES[basis_type]
        except KeyError:
            raise ValueError("unknown RT basis type '%s', expected one of %s"
                    % (basis_type, ", ".join(sorted(RT_BASIS_FAMILIES))))

        self.debug = check_debug_flags(debug, self.all_debug_flags())

        self.P = P
        self.basis_type = basis_type
        self.Np = (P+1)*(P+3)
        self.NpInt = P*(P+1)//2
        self.NpEdge = P+1

        self._build_nodes()

        self.basis = family(P, self.edge_xi)
        self.phi = self.basis.phi
        if len(self.phi) != self.Np:
            raise RuntimeError("%s basis of order %d has %d functions, "
                    "expected %d" % (basis_type, P, len(self.phi), self.Np))

        P1, P2 = self._phi_components(self.r, self.s)
        A = P1*self.directions[:, 0:1] + P2*self.directions[:, 1:2]
        C = checked_inverse(A, "RT%d dual basis matrix" % P)

        if "check_duality" in self.debug:
            check_identity(numpy.dot(A, C), "RT%d duality" % P)

        self.A = freeze(A)
        self.C = freeze(C)

        self.V1 = freeze(numpy.dot(P1, C))
        self.V2 = freeze(numpy.dot(P2, C))

        jac = self._phi_jacobians(self.r, self.s)
        self.Dr1 = freeze(numpy.dot(jac[0, 0], C))
        self.Ds1 = freeze(numpy.dot(jac[0, 1], C))
        self.Dr2 = freeze(numpy.dot(jac[1, 0], C))
        self.Ds2 = freeze(numpy.dot(jac[1, 1], C))

        div_phi = numpy.array([
            phi_j.divergence(self.r, self.s) for phi_j in self.phi]).T
        self.Div = freeze(numpy.dot(div_phi, C))

        logger.debug("built RT element of order %d (%s basis) "
                "with %d dofs, condition number %g",
                P, basis_type, self.Np, numpy.linalg.cond(A))

    def _build_nodes(self):
        from dfrbasis.nodes import nodes_epsilon
        from dfrbasis.quadrature import LegendreGaussQuadrature
        from dfrbasis.tools import freeze

        if self.P > 0:
            r_int, s_int = nodes_epsilon(self.P-1)
        else:
            r_int = s_int = numpy.zeros(0)

        self.edge_xi = freeze(numpy.sort(
            LegendreGaussQuadrature(self.P).points))

        r_parts = [r_int, r_int]
        s_parts = [s_int, s_int]
        dir_parts = [
                numpy.tile([1., 0.], (self.NpInt, 1)),
                numpy.tile([0., 1.], (self.NpInt, 1))]

        for edge in EDGE_NUMBERS:
            r_edge, s_edge = edge_points(edge, self.edge_xi)
            r_parts.append(r_edge)
            s_parts.append(s_edge)
            dir_parts.append(numpy.tile(EDGE_NORMALS[edge], (self.NpEdge, 1)))

        self.r = freeze(numpy.concatenate(r_parts))
        self.s = freeze(numpy.concatenate(s_parts))
        self.directions = freeze(numpy.concatenate(dir_parts))

    def _phi_components(self, r, s):
        values = numpy.array([phi_j.eval(r, s) for phi_j in self.phi])
        # values has shape (nphi, 2, npoints)
        return values[:, 0].T, values[:, 1].T

    def _phi_jacobians(self, r, s):
        jacs = numpy.array([phi_j.jacobian(r, s) for phi_j in self.phi])
        # (nphi, 2, 2, npoints) -> (2, 2, npoints, nphi)
        return numpy.transpose(jacs, (1, 2, 3, 0))

    # index helpers -----------------------------------------------------------
    def interior_indices(self, direction):
        """Return the DOF indices of the interior r (*direction* 0) or
        s (*direction* 1) block.
        """
        if direction not in (0, 1):
            raise ValueError("interior direction must be 0 or 1, got %r"
                    % (direction,))
        start = direction*self.NpInt
        return numpy.arange(start, start+self.NpInt)

    def edge_indices(self, edge):
        """Return the DOF indices of *edge*, in traversal order."""
        _check_edge(edge)
        start = 2*self.NpInt + (edge-1)*self.NpEdge
        return numpy.arange(start, start+self.NpEdge)

    def get_edge_xi_parameter(self, edge):
        """Return the edge coordinate xi of the nodes on *edge*."""
        idx = self.edge_indices(edge)
        return edge_xi(edge, self.r[idx], self.s[idx])

    def base_basis_vectors(self, r, s, j):
        """Return the reference vector of DOF *j* at (*r*, *s*).

        DOF *j* of a field is this vector at node *j* dotted with the
        field there, as in :meth:`project_function_onto_dof`. It is r-hat
        or s-hat for interior DOFs and the outward unit normal of the
        edge for edge DOFs, independent of the basis family.
        """
        if not 0 <= j < self.Np:
            raise ValueError("DOF index %d out of range for %d dofs"
                    % (j, self.Np))

        return ConstantVector(*self.directions[j]).eval(r, s)

    def interior_vector_field(self, r, s, direction):
        """Evaluate the interior vector field of the basis family that
        multiplies the polynomials of the interior block *direction*.

        These are Ervin's e4/e5 for the ``"ervin"`` family, whose normal
        components vanish on the boundary, and r-hat/s-hat for
        ``"romero-jameson"``.
        """
        if direction not in (0, 1):
            raise ValueError("interior direction must be 0 or 1, got %r"
                    % (direction,))
        return self.basis.interior_vectors[direction].eval(r, s)

    # operations --------------------------------------------------------------
    def project_function_onto_dof(self, s1, s2):
        """Return the DOF vector of the vector field with components *s1*,
        *s2* sampled at the nodes.
        """
        s1 = numpy.asarray(s1, dtype=numpy.float64)
        s2 = numpy.asarray(s2, dtype=numpy.float64)
        if s1.shape != (self.Np,) or s2.shape != (self.Np,):
            raise ValueError("expected %d field samples per component, "
                    "got %s and %s" % (self.Np, s1.shape, s2.shape))
        return s1*self.directions[:, 0] + s2*self.directions[:, 1]

    def divergence(self, s1, s2):
        """Return the divergence at the nodes of the RT interpolant of the
        field sampled as *s1*, *s2*.
        """
        return numpy.dot(self.Div, self.project_function_onto_dof(s1, s2))

    def interpolate(self, dof):
        """Return the two components at the nodes of the field with DOF
        vector *dof*.
        """
        dof = numpy.asarray(dof, dtype=numpy.float64)
        return numpy.dot(self.V1, dof), numpy.dot(self.V2, dof)

    def get_interp_matrices(self, r, s):
        """Return the matrices mapping DOF vectors to the two components of
        the field at the points (*r*, *s*).
        """
        r, s = _coordinates(r, s)
        P1, P2 = self._phi_components(r.ravel(), s.ravel())
        return numpy.dot(P1, self.C), numpy.dot(P2, self.C)
