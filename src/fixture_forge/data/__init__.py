"""
Word lists used by the name value generators.
"""
