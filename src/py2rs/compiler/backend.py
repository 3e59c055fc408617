"""
Rendering Engine Protocol.

Defines the abstract base for renderers that consume IR statements of one
language pair and emit target-language text.

Handlers are plain methods marked with ``@renders(Variant)``. When a concrete
renderer class is created, every registered ``Statement`` and ``Expression``
variant must have a handler; a missing case raises ``TypeError`` at import
time. Dispatch is an exact-type table lookup with no fallback branch.
"""

from abc import ABC
from typing import Callable, ClassVar, Dict, Generic, TypeVar

from py2rs.compiler.ir import Expression, Statement
from py2rs.errors import InternalInvariantViolation, LanguagePairMismatch
from py2rs.languages import LanguagePair, S, T
from py2rs.semantics.idioms import IdiomTable

F = TypeVar("F", bound=Callable[..., str])


def renders(variant: type) -> Callable[[F], F]:
  """
  Marks a renderer method as the handler for an IR variant.

  Args:
      variant: The Statement or Expression subclass handled by the method.

  Returns:
      A decorator returning the method unchanged.
  """

  def decorator(func: F) -> F:
    func._renders = variant  # type: ignore[attr-defined]
    return func

  return decorator


class Renderer(ABC, Generic[S, T]):
  """
  Abstract base class for Rendering Engines.

  Subclasses set ``pair`` and provide one ``@renders`` handler per IR variant.
  Subclasses that leave ``pair`` unset are treated as abstract and skip the
  exhaustiveness check.
  """

  pair: ClassVar[LanguagePair]
  _handlers: ClassVar[Dict[type, str]] = {}

  def __init_subclass__(cls, **kwargs) -> None:
    super().__init_subclass__(**kwargs)
    handlers: Dict[type, str] = {}
    for klass in reversed(cls.__mro__):
      if not issubclass(klass, Renderer):
        continue
      for attr_name, attr in vars(klass).items():
        variant = getattr(attr, "_renders", None)
        if variant is not None:
          handlers[variant] = attr_name
    cls._handlers = handlers

    if "pair" not in cls.__dict__:
      return

    required = set(Statement.variants()) | set(Expression.variants())
    missing = sorted(v.__name__ for v in required - set(handlers))
    if missing:
      raise TypeError(f"{cls.__name__} has no render case for IR variant(s): {', '.join(missing)}")

  def __init__(self, idioms: IdiomTable) -> None:
    """
    Args:
        idioms (IdiomTable): Table used to spell callee names.
    """
    self.idioms = idioms

  def render(self, statement: Statement[S, T]) -> str:
    """
    Renders one IR statement as target-language text.

    Args:
        statement (Statement): A statement lowered for this renderer's pair.

    Returns:
        str: The target source text for the statement.

    Raises:
        LanguagePairMismatch: If the statement was lowered for another pair.
    """
    if statement.pair != self.pair:
      raise LanguagePairMismatch(f"{type(self).__name__} renders {self.pair}, got a statement for {statement.pair}")
    return self._dispatch(statement)

  def render_expression(self, expression: Expression) -> str:
    return self._dispatch(expression)

  def resolve(self, identifier: str) -> str:
    """
    Looks up the target spelling of an identifier validated during lowering.

    Raises:
        InternalInvariantViolation: If the identifier has no mapping.
    """
    spelling = self.idioms.lookup(identifier)
    if spelling is None:
      raise InternalInvariantViolation(f"Identifier '{identifier}' reached rendering without an idiom mapping")
    return spelling

  def _dispatch(self, node: object) -> str:
    handler_name = self._handlers.get(type(node))
    if handler_name is None:
      raise InternalInvariantViolation(f"{type(self).__name__} cannot render {type(node).__name__}")
    return getattr(self, handler_name)(node)

