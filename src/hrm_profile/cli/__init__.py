"""
HRM Profile Tool Command-Line Interface
=======================================

This package provides the **hrm** command, a Click-based application
for printing and drawing the programs stored in a profiles.bin.
"""

__all__ = ["hrm"]
