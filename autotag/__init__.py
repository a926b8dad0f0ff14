"""Release-tag decision engine for GitHub Actions."""

__version__ = "0.4.0"
