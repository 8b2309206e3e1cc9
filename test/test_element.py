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




import warnings

import numpy
import numpy.linalg as la
import pytest




def test_lagrange_element_operators():
    """Check derivative and mass matrices of the nodal element"""
    from dfrbasis.element import LagrangeElement2D

    for node_type in ["hesthaven", "epsilon"]:
        for N in range(7):
            el = LagrangeElement2D(N, node_type)
            assert el.Np == (N+1)*(N+2)//2
            r, s = el.r, el.s

            for degree in range(N+1):
                for a in range(degree+1):
                    b = degree-a
                    f = r**a * s**b
                    dr = a*r**(a-1) * s**b if a else numpy.zeros_like(r)
                    ds = b*r**a * s**(b-1) if b else numpy.zeros_like(r)
                    assert la.norm(numpy.dot(el.Dr, f) - dr, numpy.inf) < 1e-8
                    assert la.norm(numpy.dot(el.Ds, f) - ds, numpy.inf) < 1e-8

            # the nodal basis sums to one, so the mass matrix sums to the area
            assert abs(el.mass_matrix.sum() - 2) < 1e-10
            assert la.norm(el.mass_matrix - el.mass_matrix.T) < 1e-12

            cub = el.cubature()
            interp = el.get_interp_matrix(cub.r, cub.s)
            cub_mass = numpy.dot(interp.T, cub.w[:, numpy.newaxis]*interp)
            assert la.norm(cub_mass - el.mass_matrix, numpy.inf) < 1e-10

            assert el.cubature() is cub




def test_lagrange_element_operators_are_read_only():
    from dfrbasis.element import LagrangeElement2D

    el = LagrangeElement2D(3)
    for ary in [el.V, el.Vinv, el.mass_matrix, el.Dr, el.Ds, el.r, el.s]:
        with pytest.raises(ValueError):
            ary[0] = 0




def test_lagrange_element_errors():
    from dfrbasis.element import LagrangeElement2D

    with pytest.raises(ValueError):
        LagrangeElement2D(-1)
    with pytest.raises(ValueError):
        LagrangeElement2D(2, node_type="gauss")




def test_debug_flags():
    """Unknown debug flags warn, known ones pass silently"""
    from dfrbasis.element import LagrangeElement2D

    with pytest.warns(UserWarning, match="Unrecognized debug flags"):
        LagrangeElement2D(2, debug=["no_such_flag"])

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        el = LagrangeElement2D(5, debug={"check_inverse", "help"})
    assert "check_inverse" in el.debug




def test_dfr_element():
    """Solution and flux elements share interior points, and the flux
    divergence is exact at the solution points"""
    from dfrbasis.element import DFRElement2D

    for N in range(5):
        dfr = DFRElement2D(N)
        flux = dfr.flux_element
        assert flux.P == N+1
        assert flux.NpInt == dfr.Np

        interior = flux.interior_indices(0)
        assert (flux.r[interior] == dfr.r).all()
        assert (flux.s[interior] == dfr.s).all()
        assert (flux.r[flux.interior_indices(1)] == dfr.r).all()

        # solution polynomials interpolate exactly onto the edges
        u = dfr.r**N - 2*dfr.s**N + 1
        edge_r = dfr.flux_r[2*flux.NpInt:]
        edge_s = dfr.flux_s[2*flux.NpInt:]
        assert la.norm(dfr.interpolate_to_edges(u)
                - (edge_r**N - 2*edge_s**N + 1), numpy.inf) < 1e-10

        k = N+1
        f1 = dfr.flux_r**k
        f2 = dfr.flux_s**k
        true_div = k*dfr.r**(k-1) + k*dfr.s**(k-1)
        assert la.norm(dfr.flux_divergence(f1, f2) - true_div,
                numpy.inf) < 1e-6

    with pytest.raises(ValueError):
        dfr.interpolate_to_edges(numpy.ones(dfr.Np+1))
    with pytest.raises(ValueError):
        DFRElement2D(-1)




def test_dfr_element_romero_jameson():
    """The flux basis family does not change the DFR operators"""
    from dfrbasis.element import DFRElement2D

    ervin = DFRElement2D(2, rt_basis="ervin", debug={"check_duality"})
    rj = DFRElement2D(2, rt_basis="romero-jameson")

    scale = max(1, abs(ervin.flux_element.Div).max())
    assert la.norm(ervin.flux_element.Div - rj.flux_element.Div,
            numpy.inf) < 1e-8*scale
