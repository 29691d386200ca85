"""Palm Pay peer-to-peer payments server."""

__version__ = "1.0.0"
