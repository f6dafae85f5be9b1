# src/truegold/data/__init__.py
"""Static data files shipped with the package."""
