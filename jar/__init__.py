# The Jar - capacity core
"""
Team capacity accounting: real capacity, Rock/Pebble/Sand loads,
shield (overload) state and the jar fill level.
"""

__version__ = "0.3.0"
