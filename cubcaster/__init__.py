"""Grid-based raycasting engine: .cub scene loading, map checks, XPM textures and a pygame view."""

__version__ = "0.1.0"
__all__ = ["colours", "errors", "xpm", "params", "grid", "scene", "raycaster", "player", "game"]