"""CourseGuard - authorization service for course selection."""

__version__ = "0.1.0"
