"""
Default Configuration Constants for the simelastic driver

This module contains the default values used by the elasticity driver and its
input parsers. Values that users are expected to tune also appear in
defaults.yaml; the constants here are the fallbacks when a key is missing.

IMPORTANT Import Policies:
    1. DO NOT use: from simelastic.config.defaults import *
       This causes namespace pollution and makes tracking difficult.

    2. DO use explicit imports:
       from simelastic.config.defaults import DEFAULT_DIMENSION, DEFAULT_CONTEXT
"""

# =============================================================================
# Driver Defaults
# =============================================================================

# Spatial dimension of the model (2 or 3)
DEFAULT_DIMENSION = 3

# XML tag holding the elasticity-specific input section
DEFAULT_CONTEXT = "elasticity"

# =============================================================================
# 2D-Only Options
# =============================================================================

# Plane strain (True) or plane stress (False) material formulation
DEFAULT_PLANE_STRAIN = False

# Axisymmetric formulation
DEFAULT_AXISYMMETRIC = False

# Export Gauss point results to VTF
DEFAULT_GAUSS_POINTS_VTF = False

# =============================================================================
# Property Code Defaults
# =============================================================================

# Component codes used when a body force is assigned to a named set
# (all displacement components in 2D and 3D respectively)
BODYFORCE_COMP_2D = 12
BODYFORCE_COMP_3D = 123

# Stride between unique property codes generated for the same component code
PROPERTY_CODE_STRIDE = 1000

# =============================================================================
# Legacy Input Defaults
# =============================================================================

# Lines starting with this character are ignored by the line reader
COMMENT_CHAR = "#"

# Separator between vector/tensor components in expression functions
EXPRESSION_COMPONENT_SEPARATOR = "|"
