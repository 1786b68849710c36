"""
Centralized Logging Package

Provides logging configuration for the service locator.
"""

from service_locator.logging.manager import LogManager, get_logger, setup_logging

__all__ = ['LogManager', 'get_logger', 'setup_logging']
