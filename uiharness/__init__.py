"""Browser-driven UI acceptance-test harness for the similar-triangles learning app."""

__version__ = "1.0.0"
