"""
CollegePath - college application journey tracker.
"""
__version__ = "1.0.0"
