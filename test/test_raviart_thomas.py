# dfrbasis - reference elements for Direct Flux Reconstruction
# Copyright (C) 2007 Andreas Kloeckner
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.




from math import sqrt
import warnings

import numpy
import numpy.linalg as la
import pytest




def test_rt_layout():
    """Count and place the degrees of freedom"""
    from dfrbasis.raviart_thomas import RTElement, EDGE_NORMALS

    for P in range(5):
        rt = RTElement(P)
        assert rt.Np == (P+1)*(P+3)
        assert rt.NpInt == P*(P+1)//2
        assert rt.NpEdge == P+1
        assert 2*rt.NpInt + 3*rt.NpEdge == rt.Np
        assert len(rt.r) == len(rt.s) == len(rt.directions) == rt.Np

        assert la.norm(la.norm(rt.directions, axis=1) - 1) < 1e-15

        for edge in [1, 2, 3]:
            idx = rt.edge_indices(edge)
            assert (rt.directions[idx] == EDGE_NORMALS[edge]).all()

        for direction in [0, 1]:
            idx = rt.interior_indices(direction)
            assert (rt.directions[idx, direction] == 1).all()
            assert (rt.r[idx] > -1).all()
            assert (rt.s[idx] > -1).all()
            assert (rt.r[idx] + rt.s[idx] < 0).all()




def test_rt2_edge_coordinates():
    """Edges run counterclockwise through 3-point Gauss nodes"""
    from dfrbasis.raviart_thomas import RTElement

    rt = RTElement(2)
    g = 0.774597

    def coords(edge):
        idx = rt.edge_indices(edge)
        return rt.r[idx], rt.s[idx]

    r, s = coords(1)
    assert la.norm(r - [-g, 0, g]) < 1e-6
    assert (s == -1).all()

    r, s = coords(2)
    assert la.norm(r - [g, 0, -g]) < 1e-6
    assert la.norm(s - [-g, 0, g]) < 1e-6

    r, s = coords(3)
    assert (r == -1).all()
    assert la.norm(s - [g, 0, -g]) < 1e-6

    for edge in [1, 2, 3]:
        assert la.norm(rt.get_edge_xi_parameter(edge) - [-g, 0, g]) < 1e-6




def test_edge_zero_is_invalid():
    """Edges are numbered 1, 2, 3"""
    from dfrbasis.raviart_thomas import RTElement, edge_xi, edge_points

    rt = RTElement(1)
    with pytest.raises(ValueError):
        rt.get_edge_xi_parameter(0)
    with pytest.raises(ValueError):
        rt.edge_indices(4)
    with pytest.raises(ValueError):
        edge_xi(0, [0.], [-1.])
    with pytest.raises(ValueError):
        edge_points(0, [0.])




def test_base_basis_vectors():
    """Edge vectors are the unit normals at the edge midpoints and the
    interior fields have no normal component on the edges"""
    from dfrbasis.raviart_thomas import RTElement

    rt = RTElement(2)

    def dot(v1, v2):
        return v1[0]*v2[0] + v1[1]*v2[1]

    offset_edge1 = 2*rt.NpInt
    offset_edge2 = 2*rt.NpInt + rt.NpEdge
    offset_edge3 = 2*rt.NpInt + 2*rt.NpEdge

    e1_nd1 = (-1., -1.)
    e1_nd2 = (1., -1.)
    e2_nd1 = e1_nd2
    e2_nd2 = (-1., 1.)
    e3_nd1 = e2_nd2
    e3_nd2 = e1_nd1

    def get_mid(start, end):
        return ((start[0]+end[0])/2, (start[1]+end[1])/2)

    edges = [
            (e1_nd1, e1_nd2, offset_edge1),
            (e2_nd1, e2_nd2, offset_edge2),
            (e3_nd1, e3_nd2, offset_edge3),
            ]

    for start, end, offset in edges:
        mid = get_mid(start, end)
        ef = rt.base_basis_vectors(mid[0], mid[1], offset)
        for point in [start, mid, end]:
            ef4 = rt.interior_vector_field(point[0], point[1], 0)
            ef5 = rt.interior_vector_field(point[0], point[1], 1)
            assert dot(ef4, ef) == 0.
            assert dot(ef5, ef) == 0.

    ef1 = rt.base_basis_vectors(0., -1., offset_edge1)
    ef2 = rt.base_basis_vectors(0., 0., offset_edge2)
    ef3 = rt.base_basis_vectors(-1., 0., offset_edge3)
    assert tuple(ef1) == (0, -1)
    assert abs(ef2[0] - 1/sqrt(2)) < 1e-7
    assert abs(ef2[1] - 1/sqrt(2)) < 1e-7
    assert tuple(ef3) == (-1, 0)

    with pytest.raises(ValueError):
        rt.base_basis_vectors(0., 0., rt.Np)
    with pytest.raises(ValueError):
        rt.interior_vector_field(0., 0., 2)




def test_dof_functional_matches_base_basis_vectors():
    """Each DOF is the field at its node dotted with the DOF's reference
    vector there, for both basis families"""
    from dfrbasis.raviart_thomas import RTElement

    for basis_type in ["ervin", "romero-jameson"]:
        for P in [0, 1, 2, 4]:
            rt = RTElement(P, basis_type)
            s1 = 1 + rt.r
            s2 = 2 - rt.s
            proj = rt.project_function_onto_dof(s1, s2)

            for j in range(rt.Np):
                b = rt.base_basis_vectors(rt.r[j], rt.s[j], j)
                assert abs(proj[j] - (b[0]*s1[j] + b[1]*s2[j])) < 1e-14

            # divergence-free field in RT_P for P > 0
            if P > 0:
                dof = numpy.array([
                    numpy.dot(rt.base_basis_vectors(rt.r[j], rt.s[j], j),
                        [s1[j], s2[j]])
                    for j in range(rt.Np)])
                assert la.norm(numpy.dot(rt.Div, dof), numpy.inf) < 1e-8

    rt = RTElement(2)
    for j in rt.interior_indices(0):
        assert tuple(rt.base_basis_vectors(-0.5, -0.5, j)) == (1, 0)
    for j in rt.interior_indices(1):
        assert tuple(rt.base_basis_vectors(-0.5, -0.5, j)) == (0, 1)




def test_rt_divergence_exact():
    """Div of the DOF projection reproduces the divergence of polynomial
    fields of degree <= P"""
    from dfrbasis.raviart_thomas import RTElement

    for basis_type in ["ervin", "romero-jameson"]:
        for P in range(1, 8):
            rt = RTElement(P, basis_type)
            r, s = rt.r, rt.s

            for k in range(P+1):
                s1 = r**k
                s2 = s**k
                if k:
                    true_div = k*r**(k-1) + k*s**(k-1)
                else:
                    true_div = numpy.zeros_like(r)

                div = numpy.dot(rt.Div, rt.project_function_onto_dof(s1, s2))
                assert la.norm(div - true_div, numpy.inf) < 1e-4, \
                        (basis_type, P, k)
                assert la.norm(rt.divergence(s1, s2) - div) == 0




def test_rt_interpolation_exact():
    """Fields in RT_P are reproduced from their DOFs"""
    from dfrbasis.raviart_thomas import RTElement

    for P in range(0, 6):
        rt = RTElement(P)
        r, s = rt.r, rt.s

        fields = [(numpy.ones_like(r), -2*numpy.ones_like(r)), (r, s)]
        for k in range(1, P+1):
            fields.append((r**k, s**k))
            fields.append((r**(k-1)*s - 1, 0.5*r**k))

        for s1, s2 in fields:
            proj = rt.project_function_onto_dof(s1, s2)
            v1, v2 = rt.interpolate(proj)
            assert la.norm(v1 - s1, numpy.inf) < 1e-6, P
            assert la.norm(v2 - s2, numpy.inf) < 1e-6, P

        # the nodal basis is dual to the DOF functionals
        dof = numpy.random.RandomState(P).uniform(-1, 1, rt.Np)
        assert la.norm(rt.project_function_onto_dof(*rt.interpolate(dof))
                - dof, numpy.inf) < 1e-8

        i1, i2 = rt.get_interp_matrices(r, s)
        assert la.norm(i1 - rt.V1, numpy.inf) < 1e-10
        assert la.norm(i2 - rt.V2, numpy.inf) < 1e-10




def test_rt_derivative_matrices():
    """Component derivatives are exact and consistent with Div"""
    from dfrbasis.raviart_thomas import RTElement

    for P in range(2, 5):
        rt = RTElement(P)
        r, s = rt.r, rt.s

        scale = max(1, abs(rt.Div).max())
        assert la.norm(rt.Div - (rt.Dr1 + rt.Ds2), numpy.inf) < 1e-9*scale

        s1 = r**(P-1) * s
        s2 = r - s**P
        proj = rt.project_function_onto_dof(s1, s2)
        assert la.norm(numpy.dot(rt.Dr1, proj) - (P-1)*r**(P-2)*s,
                numpy.inf) < 1e-6
        assert la.norm(numpy.dot(rt.Ds1, proj) - r**(P-1), numpy.inf) < 1e-6
        assert la.norm(numpy.dot(rt.Dr2, proj) - 1, numpy.inf) < 1e-6
        assert la.norm(numpy.dot(rt.Ds2, proj) + P*s**(P-1), numpy.inf) < 1e-6




def test_rt_families_agree():
    """Both spanning sets of RT_P give the same nodal basis"""
    from dfrbasis.raviart_thomas import RTElement

    for P in range(0, 5):
        ervin = RTElement(P, "ervin")
        rj = RTElement(P, "romero-jameson", debug={"check_duality"})

        for name in ["V1", "V2", "Dr1", "Ds1", "Dr2", "Ds2", "Div"]:
            a = getattr(ervin, name)
            b = getattr(rj, name)
            scale = max(1, abs(a).max())
            assert la.norm(a - b, numpy.inf) < 1e-8*scale, (P, name)




def test_rt0_matrices():
    """Compare the lowest order element against hand-computed values"""
    from dfrbasis.raviart_thomas import RTElement

    c = sqrt(2)/2
    V1 = [[0.5, c, -0.5], [0.5, c, -0.5], [0, 0, -1]]
    V2 = [[-1, 0, 0], [-0.5, c, 0.5], [-0.5, c, 0.5]]
    Div = [[1, sqrt(2), 1]]*3

    for basis_type in ["ervin", "romero-jameson"]:
        rt = RTElement(0, basis_type)
        assert la.norm(rt.r - [0, 0, -1]) < 1e-15
        assert la.norm(rt.s - [-1, 0, 0]) < 1e-15

        assert la.norm(rt.V1 - V1) < 1e-12
        assert la.norm(rt.V2 - V2) < 1e-12
        assert la.norm(rt.Div - Div) < 1e-12




def test_rt_basis_vector_derivatives():
    """Analytic jacobians and divergences of the basis vectors match
    finite differences"""
    from dfrbasis.raviart_thomas import (ConstantVector, ErvinInteriorVector,
            ervin_edge_vector, position_vector)

    vectors = [ConstantVector(0.3, -0.7), ErvinInteriorVector(4),
            ErvinInteriorVector(5), position_vector()] + [
                    ervin_edge_vector(edge) for edge in [1, 2, 3]]

    r = numpy.array([-0.5, 0.1, -0.9, 0.3])
    s = numpy.array([-0.2, -0.6, 0.7, -0.95])
    h = 1e-6

    for vector in vectors:
        jac = vector.jacobian(r, s)
        fd_r = (vector.eval(r+h, s) - vector.eval(r-h, s))/(2*h)
        fd_s = (vector.eval(r, s+h) - vector.eval(r, s-h))/(2*h)

        assert la.norm(jac[:, 0] - fd_r) < 1e-8
        assert la.norm(jac[:, 1] - fd_s) < 1e-8
        assert la.norm(vector.divergence(r, s) - (jac[0, 0] + jac[1, 1])) \
                < 1e-14

        f = numpy.array([r, s])
        assert la.norm(vector.dot(r, s, f)
                - (vector.eval(r, s)*f).sum(axis=0)) < 1e-14
        assert la.norm(vector.project(r, s, 2.) - 2*vector.eval(r, s)) == 0

    with pytest.raises(ValueError):
        ErvinInteriorVector(3)




def test_basis_polynomial_term_divergence():
    """The product rule divergence matches finite differences"""
    from dfrbasis.raviart_thomas import RTElement

    rt = RTElement(3)
    r = numpy.array([-0.5, 0.1, -0.8])
    s = numpy.array([-0.2, -0.6, 0.5])
    h = 1e-5

    for phi in rt.phi:
        fd_div = (
                (phi.eval(r+h, s)[0] - phi.eval(r-h, s)[0])
                + (phi.eval(r, s+h)[1] - phi.eval(r, s-h)[1]))/(2*h)
        div = phi.divergence(r, s)
        assert la.norm(div - fd_div, numpy.inf) < 1e-6*max(1, abs(div).max())




def test_rt_errors():
    from dfrbasis.raviart_thomas import RTElement

    with pytest.raises(ValueError):
        RTElement(-1)
    with pytest.raises(ValueError):
        RTElement(1, basis_type="nedelec")

    rt = RTElement(1)
    with pytest.raises(ValueError):
        rt.project_function_onto_dof(numpy.zeros(rt.Np-1), numpy.zeros(rt.Np))
    with pytest.raises(ValueError):
        rt.interior_indices(2)
    with pytest.raises(ValueError):
        rt.Div[0, 0] = 1

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        RTElement(3, debug={"check_duality"})




def test_incomplete_basis_family_is_rejected(monkeypatch):
    """A basis family with the wrong number of functions fails loudly"""
    from dfrbasis import raviart_thomas
    from dfrbasis.raviart_thomas import RTElement, ErvinRTBasis

    class TruncatedBasis(ErvinRTBasis):
        name = "truncated"

        def __init__(self, P, edge_xi_nodes):
            ErvinRTBasis.__init__(self, P, edge_xi_nodes)
            self.phi = self.phi[:-1]

    monkeypatch.setitem(raviart_thomas.RT_BASIS_FAMILIES,
            TruncatedBasis.name, TruncatedBasis)

    with pytest.raises(RuntimeError):
        RTElement(2, basis_type="truncated")
