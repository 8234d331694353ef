"""Inspector CLI: patch JSX files locally, save and load components remotely."""

__version__ = "0.1.0"
