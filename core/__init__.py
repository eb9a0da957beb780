"""
Core utilities and shared components for Schedule Kit.

This package provides the pieces shared by the schedule engines and the
schedule sessions: the availability cache and the exception hierarchy.
"""

__version__ = "1.0.0"
