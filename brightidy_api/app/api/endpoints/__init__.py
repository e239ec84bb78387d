"""
Endpoint modules grouped by domain.
"""
