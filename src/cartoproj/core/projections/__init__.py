"""
Projection engine.

This module provides:
- The projection base class, registry and equality checks
- Geographic, HRAP, UTM and Unknown projections
- Descriptor parsing
- Reprojection of shapes and coordinate arrays
"""

from cartoproj.core.projections.base import (
    UNKNOWN_PROJECTION_NAME,
    Projection,
    need_to_project,
    projections_equal,
)
from cartoproj.core.projections.dispatcher import (
    project_coordinates,
    project_shape,
    supported_shape_types,
)
from cartoproj.core.projections.gctp import adjust_longitude
from cartoproj.core.projections.geographic import GeographicProjection, geographic_projection
from cartoproj.core.projections.hrap import HRAPProjection
from cartoproj.core.projections.parser import available_projection_names, parse_projection
from cartoproj.core.projections.registry import ProjectionRegistry, projection_registry
from cartoproj.core.projections.unknown import UnknownProjection
from cartoproj.core.projections.utm import (
    FootpointResult,
    UTMParameters,
    UTMProjection,
    central_meridian,
    footpoint_latitude,
)

__all__ = [
    # Base
    "UNKNOWN_PROJECTION_NAME",
    "Projection",
    "need_to_project",
    "projections_equal",
    # Registry
    "ProjectionRegistry",
    "projection_registry",
    # Projections
    "GeographicProjection",
    "geographic_projection",
    "HRAPProjection",
    "UnknownProjection",
    "UTMProjection",
    "UTMParameters",
    "FootpointResult",
    "central_meridian",
    "footpoint_latitude",
    "adjust_longitude",
    # Parsing
    "available_projection_names",
    "parse_projection",
    # Reprojection
    "project_coordinates",
    "project_shape",
    "supported_shape_types",
]
