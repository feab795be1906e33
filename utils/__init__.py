"""
Utility modules for the Summary Chief scheduler
"""

from .logger import ChiefLogger
from .validators import RequestValidator, DataSanitizer

__all__ = ['ChiefLogger', 'RequestValidator', 'DataSanitizer']
