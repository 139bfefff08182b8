"""
Console record manager for students, courses and enrollments kept in flat files.
"""

__version__ = "1.0.0"
