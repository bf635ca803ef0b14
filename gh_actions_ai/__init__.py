"""GitHub Actions automation: AI code reviews and README issue summaries."""

__version__ = "1.0.0"
