"""
Compiler Package.

This package defines the Intermediate Representation (IR) and the two
transformations around it: lowering (source AST -> IR) and rendering
(IR -> target text). The source parser is wrapped by a frontend so that the
rest of the pipeline never touches raw text.
"""

from py2rs.compiler.backend import Renderer
from py2rs.compiler.ir import Expression, Statement
from py2rs.compiler.lowering import Lowerer

__all__ = ["Expression", "Lowerer", "Renderer", "Statement"]
