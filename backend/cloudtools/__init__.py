# backend/cloudtools/__init__.py
from __future__ import annotations

"""
Marks `cloudtools` as a Python package.

Routers live in cloudtools/api, tool invocation in cloudtools/services, etc.
"""
