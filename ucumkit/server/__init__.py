"""
ucumkit Server
==============

HTTP/Lambda handlers for the public operations and batch canonization.
"""

from .handler import canonize_batch, canonize_row, lambda_handler
from .routes import app

__all__ = ['canonize_batch', 'canonize_row', 'lambda_handler', 'app']
