"""
Document Overlap Analyzer

Detects textual overlap between plain-text documents and ranks document
pairs by similarity.
"""

__version__ = "1.0.0"

from .core import *
from .utils import *
