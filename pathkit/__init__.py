"""pathkit: PATH splitting and canonical path resolution tools."""

__version__ = "0.1.0"
