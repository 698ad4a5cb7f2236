"""
Route modules for the App Catalog API.
"""
