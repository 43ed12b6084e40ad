"""Game engine core: scenes and components, cameras, vertex layouts, shader sources and block scripting."""

__version__ = "0.1.0"