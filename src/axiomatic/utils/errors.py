"""
Error types for the Axiomatic capability system.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from axiomatic.utils.diagnostics import Diagnostic


class AxiomaticError(Exception):
    """Base exception for all Axiomatic errors."""

    def __init__(self, message: str, diagnostic: Optional[Diagnostic] = None) -> None:
        self.message = message
        self.diagnostic = diagnostic
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.diagnostic is None:
            return self.message
        return self.diagnostic.render(use_color=False)


class CapabilityError(AxiomaticError):
    """
    Raised when a type does not satisfy a capability bound.

    This is the counterpart of a compile-time trait rejection: it is raised
    while a generic is being instantiated, before any generic body runs.

    Attributes:
        missing: The failed leaf obligations, one per missing axiom
    """

    def __init__(
        self,
        message: str,
        diagnostic: Optional[Diagnostic] = None,
        missing: Sequence[object] = (),
    ) -> None:
        self.missing = tuple(missing)
        super().__init__(message, diagnostic)


class OperatorNotSupportedError(AxiomaticError, TypeError):
    """Raised when an operator is applied to a type lacking the operator trait."""

    pass


class TypeMismatchError(AxiomaticError, TypeError):
    """
    Raised when operand or component types disagree.

    This error is raised when:
    - Complex components have different algebraic types
    - List elements are mixed, or the element count does not match N
    - Two operands of a binary operator have different types
    - A type variable is inferred as two different types
    - A Python value has no algebraic type
    """

    pass


class UnknownCapabilityError(AxiomaticError, LookupError):
    """Raised when a capability or structure is looked up by an unknown name."""

    def __init__(
        self,
        message: str,
        diagnostic: Optional[Diagnostic] = None,
        suggestions: Optional[list[str]] = None,
    ) -> None:
        self.suggestions = suggestions or []
        super().__init__(message, diagnostic)
