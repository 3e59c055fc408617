"""
Compiler Frontends Package.

Wrappers around external parsers that yield top-level source statements.
"""

from py2rs.compiler.frontends.python import ParsedSource, PythonFrontend

__all__ = ["ParsedSource", "PythonFrontend"]
