"""
Configuration package.
"""

from service_locator.config.settings import LocatorConfig

__all__ = ['LocatorConfig']
