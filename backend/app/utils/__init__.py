"""
Utility functions for FamilyFolio.

This package contains:
- datetime_utils: UTC timestamps, ISO date parsing and rendering
- decimal_utils: numeric column precision checks
"""
