"""Core business logic layer.

Subpackages:
- meals: logging, moving and deleting meals within week buckets
"""
__all__ = ["meals"]
