"""
Cross-cutting infrastructure: configuration, logging and database access.
"""
