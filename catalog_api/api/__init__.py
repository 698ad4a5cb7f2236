"""
API package for the App Catalog API.

HTTP routes, request dependencies and exception handlers.
"""
