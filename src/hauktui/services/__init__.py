"""Service layer for hauktui."""
