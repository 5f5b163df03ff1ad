"""Headless wireframe graphics toolkit: window, images, render queue, textures, input and view controls."""

__version__ = "0.1.0"

__all__ = [
    "controls",
    "errors",
    "images",
    "input",
    "png",
    "renderqueue",
    "util",
    "window",
    "xpm42",
]