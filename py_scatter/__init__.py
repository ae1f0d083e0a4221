"""
Python procedural scatter engine.
"""

from .core import ScatterGenerator, ScatterPoint, ScatterSettings, ScatterZone, Vec3
from .logging_config import configure_logging

__version__ = "0.1.0"

__all__ = ['ScatterGenerator', 'ScatterPoint', 'ScatterSettings', 'ScatterZone', 'Vec3',
           'configure_logging']
