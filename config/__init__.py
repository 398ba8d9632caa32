"""
Configuration Module
Environment-driven settings for the WEX trading client
"""

from .config import Config

__all__ = ['Config']
