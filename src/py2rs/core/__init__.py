"""
Core Package.

Contains the orchestration engine that sequences parse -> lower -> render.
"""
