"""
App Catalog API - Normalization layer for app-store catalog providers.

This package exposes one uniform JSON API over the iOS App Store and Google Play,
translating request parameters into each provider's vocabulary and normalizing
their responses into platform-agnostic records.
"""

__version__ = "0.1.0"
