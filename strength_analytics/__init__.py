"""
Strength Analytics
Strength progression, personal record and muscle-balance analysis service
"""

__version__ = "1.0.0"
