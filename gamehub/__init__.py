"""
Top level package for the GameHub gaming account storefront.

This file marks the directory as a Python package and allows relative imports
throughout the project.
"""

__all__ = []
