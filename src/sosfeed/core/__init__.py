"""Core domain package for sosfeed.

Core contains formatting, validation, feed and submission state without any
HTTP or UI-specific code, keeping the business logic portable.
"""
