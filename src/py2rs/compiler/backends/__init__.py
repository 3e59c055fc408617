"""
Compiler Backends Package.

Contains concrete implementations of the ``Renderer`` interface
for specific target languages.
"""

from py2rs.compiler.backends.rust import RustRenderer

__all__ = ["RustRenderer"]
