"""
HTTP routers, one per access level.
"""

from tableorder.routers import admin, users

__all__ = ["admin", "users"]
