"""
🔧 genopt Utils
Run tracking helpers
"""

from .fitness_tracker import FitnessTracker

__all__ = ['FitnessTracker']
