"""
TASKNEST API - Authentication Module

Password hashing, token codec, route guard and ownership checks.
Routers are imported from their modules directly (see tasknest.main).
"""
