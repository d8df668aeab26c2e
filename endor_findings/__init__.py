"""Fetch security findings from the Endor Labs API and save them as JSON reports"""

__version__ = "0.1.0"
