"""Real-time air quality and weather lookup for a coordinate."""

__version__ = "1.0.0"
