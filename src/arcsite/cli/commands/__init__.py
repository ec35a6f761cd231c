"""
CLI commands for arcsite.
"""
