"""
Configuration modules for scatter generation.
"""

from .config import EngineSettings, settings

__all__ = ['EngineSettings', 'settings']
