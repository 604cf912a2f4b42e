"""Bulk backup and call-forwarding configuration for Webex Calling users."""

__all__ = ['__version__']

__version__ = '1.0.0'
