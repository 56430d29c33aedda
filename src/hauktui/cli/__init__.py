"""Command line interface for hauktui."""
