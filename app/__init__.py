"""
Command-line surface for the projection engine.
"""
