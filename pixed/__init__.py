"""Core data structures for a raster pixel editor: input events, colours, pixel buffers, undo snapshots, palettes and command parsing."""

__version__ = "0.4.0"

__all__ = ["palette", "parser", "pixels", "platform", "resources"]