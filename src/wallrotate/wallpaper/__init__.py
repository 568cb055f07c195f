"""Wallpaper setter module."""

from .setters import WallpaperSetter, CustomSetter, SETTERS, get_setter

__all__ = ["WallpaperSetter", "CustomSetter", "SETTERS", "get_setter"]
