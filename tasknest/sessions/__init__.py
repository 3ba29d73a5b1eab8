"""
TASKNEST API - Sessions Module

Server-side records of issued tokens.
"""
