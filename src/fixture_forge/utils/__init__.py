"""
Utility helpers shared across fixture-forge.
"""
