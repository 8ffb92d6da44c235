"""Three-way tie analysis for round-robin tournament groups."""

__version__ = "0.1.0"
