"""
TASKNEST API - Users Module
"""
