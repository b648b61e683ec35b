"""
User Records API - CRUD service for user records over pluggable storage
"""

__version__ = "1.0.0"
