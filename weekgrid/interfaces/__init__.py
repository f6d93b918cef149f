"""Abstract interfaces for the caller-side collaborators."""

from weekgrid.interfaces.render_target import IRenderTarget

__all__ = [
    "IRenderTarget",
]
