"""
TASKNEST API - Dashboard Module
"""
