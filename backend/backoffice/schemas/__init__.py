# backoffice/schemas/__init__.py
"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .auth import *
from .blog import *
from .patch import *
from .user import *
