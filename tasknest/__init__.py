"""
TASKNEST API

Task management service with JWT bearer authentication.
"""

__version__ = "0.1.0"
