"""Grid raycasting maze explorer: .cub scene loading, ray casting, rendering and a pygame game."""

__version__ = "0.1.0"
__all__ = ["__version__"]