"""Routing — declaration DSL, route table, helpers, and dispatch.

Routes are declared during setup and frozen into read-only structures
before the first request is served.
"""
