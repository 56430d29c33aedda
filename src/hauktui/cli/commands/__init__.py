"""CLI commands for hauktui."""
