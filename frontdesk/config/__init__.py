"""
Configuration package for the front desk service.

Environment settings and logging configuration.
"""

from frontdesk.config.settings import settings, get_settings, Settings
from frontdesk.config.logging import setup_logging

__all__ = ['settings', 'get_settings', 'Settings', 'setup_logging']
