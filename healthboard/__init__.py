"""Web front end for an endpoint health dashboard."""

__version__ = "0.1.0"