#!/usr/bin/env python
# -*- coding: utf-8 -*-

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




def main():
    from setuptools import setup

    setup(name="dfrbasis",
            # metadata
            version="0.1",
            description="Reference elements for Direct Flux Reconstruction "
                "on triangles",
            long_description="""
            dfrbasis builds the reference-element operators of a
            Discontinuous Galerkin / Direct Flux Reconstruction
            solver on triangles.

            Features:

            * Orthonormal simplex (Jacobi) bases, Vandermonde and
              differentiation matrices of any order
            * Warp-and-blend and strictly interior node sets
            * Raviart-Thomas vector elements with a nodal basis and an
              exact divergence operator
            * Triangle cubature up to order 28
            """,
            author="Andreas Kloeckner",
            author_email="inform@tiker.net",
            license="GPLv3",
            classifiers=[
              'Development Status :: 4 - Beta',
              'Intended Audience :: Developers',
              'Intended Audience :: Science/Research',
              'License :: OSI Approved :: GNU General Public License (GPL)',
              'Natural Language :: English',
              'Programming Language :: Python',
              'Programming Language :: Python :: 3',
              'Topic :: Scientific/Engineering',
              'Topic :: Scientific/Engineering :: Mathematics',
              'Topic :: Scientific/Engineering :: Physics',
              ],

            # build info
            packages=[
                    "dfrbasis",
                    "dfrbasis.tools",
                    ],

            python_requires=">=3.8",
            install_requires=[
                "numpy",
                "scipy",
                "pytools>=2020.1",
                ],
            extras_require={
                "test": ["pytest"],
                },
            )




if __name__ == '__main__':
    main()
