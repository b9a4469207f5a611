"""Building blocks for a VR video library: hashing, funscript heatmaps, previews, scene metadata and player packets."""

__version__ = "0.1.0"