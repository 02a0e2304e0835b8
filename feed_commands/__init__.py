"""Install command line extensions from a package feed."""

__version__ = "0.1.0"
