"""Custom media manifest generator."""
