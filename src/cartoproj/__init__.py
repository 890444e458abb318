"""
Cartoproj - cartographic projection and shape reprojection engine.

This package converts coordinates between geodetic longitude/latitude and
projected grid systems (HRAP, UTM, geographic pass-through) and applies
those conversions to points, polylines, polygons, multi-part shapes, arcs
and bounding boxes.
"""

__version__ = "0.1.0"
