"""Core configuration and error types for hauktui."""
