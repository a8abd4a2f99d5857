"""Core business logic: league catalog, ESPN client, normalization, and filters.

This module is framework-agnostic. It has no dependency on MCP, Starlette,
or any server framework.
"""
