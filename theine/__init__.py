"""Building blocks for a W-TinyLFU in-memory cache: sketch, doorkeeper, lists, buffers and locks."""

__version__ = "0.1.0"