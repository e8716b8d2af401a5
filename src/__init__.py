"""
picoCalc - Main Package
=======================

Multirotor performance calculator.

This package provides:
- Multirotor Analysis (multirotor_analyzer): steady-state performance
  prediction of a multirotor drive train and airframe
"""

__version__ = "0.1.0"
