"""
Core package for the App Catalog API.

Configuration, logging, exceptions and the operation result type shared by
every other layer.
"""
