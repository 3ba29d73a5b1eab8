"""
TASKNEST API - Tasks Module

CRUD operations for user tasks.
"""
