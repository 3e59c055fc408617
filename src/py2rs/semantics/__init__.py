"""
Semantic knowledge: identifier mappings between languages.
"""

from py2rs.semantics.idioms import IdiomEntry, IdiomTable, load_idiom_table, clear_idiom_cache

__all__ = ["IdiomEntry", "IdiomTable", "load_idiom_table", "clear_idiom_cache"]
