"""Core business logic layer.

Subpackages:
- shopping: ingredient aggregation and the "to buy" list
"""
__all__ = ["shopping"]
