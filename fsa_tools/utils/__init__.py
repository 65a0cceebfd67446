"""Provide utility functions used by the rest of this package.

"""

from . import words, logging_config
