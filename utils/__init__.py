"""Utility classes for batch hedge analysis"""

from .progress import ProgressMonitor

__all__ = ['ProgressMonitor']
