from __future__ import annotations

"""
Service layer: tool discovery, invocation and output interpretation.
"""
