"""
Authentication helpers: JWT encoding and the current-user dependency.
"""
