"""Command line interface for schedulec."""
