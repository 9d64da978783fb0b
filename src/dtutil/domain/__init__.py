"""Domain layer: units, pattern compiler, and the pure date-time operations.

This layer depends only on the standard library.
It must never import from services, commands, config or output.
"""
