"""
leavegate - business-day leave duration and approval policy gate.
"""

__version__ = "0.1.0"
