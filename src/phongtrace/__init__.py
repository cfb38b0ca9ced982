"""Python implementation of a Phong-shaded sphere ray tracer.

This package provides the geometric and shading core of a ray tracer, with:
- Homogeneous-coordinate points, vectors and colors
- A square-matrix engine with determinant and inverse support
- Affine transformation composition
- Ray/sphere intersection and hit selection
- Phong local illumination with a single point light
- A Taichi kernel that runs the per-pixel pipeline in parallel

Subpackages:
    core: Tuples, colors, matrices, transformations, rays and the integrator
    geometry: The unit sphere primitive
    materials: Phong material and point light
    scene: Intersection records, world aggregation and GPU scene upload
    camera: Pinhole camera projecting rays onto a wall
    preview: Canvas, PPM/PNG export and preview display
"""

__version__ = "0.1.0"
