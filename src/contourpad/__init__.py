"""ContourPad - Turn drawn or imported artwork into a pseudo-3D thickness mesh.

ContourPad scans a raster canvas for its silhouette from many directions,
simplifies the resulting outline into a polygon, splits it at its rightmost point
into two boundary curves, resamples those into paired cross-sections and
finally extrudes them into a strip mesh using a parametric thickness profile.

Example:
    $ contourpad drawing.png -o drawing.stl

This will create drawing.stl containing the extruded silhouette.
"""

__version__ = "0.1.0"
__author__ = "ContourPad Contributors"

__all__ = ["__author__", "__version__"]
