"""
Jupiter API protocol client
"""

from .api import JupiterAPI

__all__ = [
    "JupiterAPI",
]
