"""FAIRsoft metadata extraction and update service for GitHub repositories."""

__version__ = "1.0.0"
