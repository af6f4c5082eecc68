"""
StampLab — structured system-safety analysis engines.
"""

__version__ = "0.1.0"
