"""Interactive 3D gravity simulation of a small planetary system, with window-free physics, camera and mesh modules."""

__version__ = "0.1.0"
__all__ = ["__version__"]