"""Jacobi polynomials and the orthonormal simplex basis on the triangle."""

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




def jacobi_p(x, alpha, beta, N):
    """Evaluate the normalized Jacobi polynomial of type (*alpha*, *beta*)
    and order *N* at the points *x*.

    The polynomials are orthonormal with respect to the weight
    :math:`(1-x)^\\alpha (1+x)^\\beta` on :math:`[-1,1]`.
    See Hesthaven/Warburton, Appendix A.
    """
    from math import sqrt
    from scipy.special import gamma

    x = numpy.asarray(x, dtype=numpy.float64)
    flat_x = x.reshape(-1)

    PL = numpy.zeros((N+1, len(flat_x)))

    gamma0 = (2**(alpha+beta+1)/(alpha+beta+1)
            * gamma(alpha+1)*gamma(beta+1)/gamma(alpha+beta+1))
    PL[0] = 1/sqrt(gamma0)
    if N == 0:
        return PL[0].reshape(x.shape)

    gamma1 = (alpha+1)*(beta+1)/(alpha+beta+3)*gamma0
    PL[1] = ((alpha+beta+2)*flat_x/2 + (alpha-beta)/2)/sqrt(gamma1)
    if N == 1:
        return PL[1].reshape(x.shape)

    aold = 2/(2+alpha+beta)*sqrt((alpha+1)*(beta+1)/(alpha+beta+3))

    for i in range(1, N):
        h1 = 2*i+alpha+beta
        anew = 2/(h1+2)*sqrt(
                (i+1)*(i+1+alpha+beta)*(i+1+alpha)*(i+1+beta)
                / (h1+1)/(h1+3))
        bnew = -(alpha**2-beta**2)/h1/(h1+2)
        PL[i+1] = 1/anew*(-aold*PL[i-1] + (flat_x-bnew)*PL[i])
        aold = anew

    return PL[N].reshape(x.shape)




def grad_jacobi_p(x, alpha, beta, N):
    """Evaluate the derivative of :func:`jacobi_p` at the points *x*."""
    from math import sqrt

    x = numpy.asarray(x, dtype=numpy.float64)
    if N == 0:
        return numpy.zeros(x.shape)
    return sqrt(N*(N+alpha+beta+1))*jacobi_p(x, alpha+1, beta+1, N-1)




class JacobiFunction(object):
    def __init__(self, alpha, beta, N):
        self.alpha = alpha
        self.beta = beta
        self.N = N

    def __call__(self, x):
        return jacobi_p(x, self.alpha, self.beta, self.N)




class DiffJacobiFunction(JacobiFunction):
    def __call__(self, x):
        return grad_jacobi_p(x, self.alpha, self.beta, self.N)




class LegendreFunction(JacobiFunction):
    def __init__(self, N):
        JacobiFunction.__init__(self, 0, 0, N)




class DiffLegendreFunction(DiffJacobiFunction):
    def __init__(self, N):
        DiffJacobiFunction.__init__(self, 0, 0, N)




def generic_vandermonde(points, functions):
    """Return a Vandermonde matrix.

    The Vandermonde Matrix is given by :math:`V_{i,j} := f_j(x_i)`
    where *functions* is the list of :math:`f_j` and points is
    the list of :math:`x_i`. The :math:`f_j` must accept an array of
    points.
    """
    points = numpy.asarray(points, dtype=numpy.float64)
    v = numpy.zeros((len(points), len(functions)))
    for j, f in enumerate(functions):
        v[:, j] = f(points)
    return v




def legendre_vandermonde(points, N):
    return generic_vandermonde(points,
            [LegendreFunction(i) for i in range(N+1)])




# simplex basis ---------------------------------------------------------------
def rs_to_ab(r, s):
    """Map reference triangle coordinates (r, s) to the collapsed
    square coordinates (a, b).

    The top vertex s = 1 collapses to a single point; there a = -1.
    """
    r = numpy.asarray(r, dtype=numpy.float64)
    s = numpy.asarray(s, dtype=numpy.float64)

    r, s = numpy.broadcast_arrays(r, s)
    flat_r = r.reshape(-1)
    flat_s = s.reshape(-1)

    a = -numpy.ones(flat_r.shape)
    non_apex = flat_s != 1
    a[non_apex] = 2*(1+flat_r[non_apex])/(1-flat_s[non_apex]) - 1
    return a.reshape(r.shape), s.copy()




def simplex_mode_indices(N):
    """Generate the mode indices (i, j), i+j <= N, in canonical order.

    The order of this sequence fixes the column order of every
    Vandermonde matrix in this package.
    """
    for i in range(N+1):
        for j in range(N+1-i):
            yield i, j




def simplex_2d_p(r, s, i, j, alpha=0, beta=0):
    """Evaluate the (*i*, *j*)-th orthonormal basis function on the
    reference triangle at (*r*, *s*).
    """
    from math import sqrt

    a, b = rs_to_ab(r, s)
    h1 = jacobi_p(a, alpha, beta, i)
    h2 = jacobi_p(b, 2*i+1, beta, j)
    return sqrt(2)*h1*h2*(1-b)**i




def grad_simplex_2d_p(r, s, i, j, alpha=0, beta=0):
    """Return the (r, s) derivatives of :func:`simplex_2d_p`."""
    a, b = rs_to_ab(r, s)

    fa = jacobi_p(a, alpha, beta, i)
    dfa = grad_jacobi_p(a, alpha, beta, i)
    gb = jacobi_p(b, 2*i+1, beta, j)
    dgb = grad_jacobi_p(b, 2*i+1, beta, j)

    # r-derivative
    dmodedr = dfa*gb
    if i > 0:
        dmodedr = dmodedr*(0.5*(1-b))**(i-1)

    # s-derivative
    dmodeds = dfa*(gb*(0.5*(1+a)))
    if i > 0:
        dmodeds = dmodeds*(0.5*(1-b))**(i-1)

    tmp = dgb*(0.5*(1-b))**i
    if i > 0:
        tmp = tmp - 0.5*i*gb*(0.5*(1-b))**(i-1)
    dmodeds = dmodeds + fa*tmp

    # normalize
    scale = 2**(i+0.5)
    return scale*dmodedr, scale*dmodeds




def vandermonde_2d(N, r, s, alpha=0, beta=0):
    """Return the 2D Vandermonde matrix
    :math:`V_{k,m} = \\psi_m(r_k, s_k)` of the order-*N* simplex basis.
    """
    r = numpy.asarray(r, dtype=numpy.float64)
    s = numpy.asarray(s, dtype=numpy.float64)

    modes = list(simplex_mode_indices(N))
    v = numpy.zeros((len(r), len(modes)))
    for m, (i, j) in enumerate(modes):
        v[:, m] = simplex_2d_p(r, s, i, j, alpha, beta)
    return v




def grad_vandermonde_2d(N, r, s, alpha=0, beta=0):
    """Return the gradient Vandermonde matrices *(Vr, Vs)* of the
    order-*N* simplex basis.
    """
    r = numpy.asarray(r, dtype=numpy.float64)
    s = numpy.asarray(s, dtype=numpy.float64)

    modes = list(simplex_mode_indices(N))
    vr = numpy.zeros((len(r), len(modes)))
    vs = numpy.zeros((len(r), len(modes)))
    for m, (i, j) in enumerate(modes):
        vr[:, m], vs[:, m] = grad_simplex_2d_p(r, s, i, j, alpha, beta)
    return vr, vs
