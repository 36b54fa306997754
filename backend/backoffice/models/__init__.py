# backoffice/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Back office identity (credentials, role, login activity)
- Blog: Blog post content and SEO metadata
"""
from .user import Role, User
from .blog import Blog
