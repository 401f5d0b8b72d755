"""
Enumerations for the simelastic driver

Import Policy:
    from simelastic.config.enums import PropertyKind, VecFuncType

DO NOT use: from simelastic.config.enums import *
"""

from enum import Enum


class PropertyKind(Enum):
    """What a property record binds to its patch or face.

    Options:
        MATERIAL: Material assignment; the record code is a catalog index
        DIRICHLET: Homogeneous prescribed displacement
        DIRICHLET_INHOM: Inhomogeneous prescribed displacement (value or field)
        DIRICHLET_ANASOL: Prescribed displacement taken from the analytical solution
        NEUMANN: Traction or pressure load
        NEUMANN_ANASOL: Traction taken from the analytical stress solution
        BODYLOAD: Body force over the patch interior
        UNDEFINED: Declared but unbound (or demoted during pre-processing)

    Note:
        The two *_ANASOL kinds only exist between parsing and pre-processing.
        preprocess() rewrites them into DIRICHLET_INHOM, NEUMANN or UNDEFINED.
    """
    MATERIAL = "material"
    DIRICHLET = "dirichlet"
    DIRICHLET_INHOM = "dirichlet_inhom"
    DIRICHLET_ANASOL = "dirichlet_anasol"
    NEUMANN = "neumann"
    NEUMANN_ANASOL = "neumann_anasol"
    BODYLOAD = "bodyload"
    UNDEFINED = "undefined"


class VecFuncType(Enum):
    """Surface syntax of a vector function body.

    Options:
        EXPRESSION: Components as expressions in x, y, z, t separated by '|'
        CONSTANT: Whitespace-separated numbers
    """
    EXPRESSION = "expression"
    CONSTANT = "constant"
