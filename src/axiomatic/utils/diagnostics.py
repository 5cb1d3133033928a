"""
Rust-like Rich Error Diagnostics for Axiomatic.

Capability failures are reported in the style of a compiler error, with one
note per missing axiom and help lines pointing at the bound that demanded it.

Example output:
    error[E0277]: the bound `Complex[f64]: VectorSpace[f64]` is not satisfied
       = note: missing `Complex[f64]: Distributive[f64]`: `Complex[f64]` does not support `* f64`
       = help: required by `V: VectorSpace[F]` in `axpy`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of error codes for Axiomatic diagnostics.

    Codes follow the numbering of the rustc errors they mirror.
    """

    E0277 = "E0277"  # capability bound not satisfied
    E0308 = "E0308"  # mismatched types
    E0369 = "E0369"  # binary operator not supported
    E0405 = "E0405"  # unknown capability
    E0600 = "E0600"  # unary operator not supported


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0277: "capability bound not satisfied",
    ErrorCode.E0308: "mismatched types",
    ErrorCode.E0369: "binary operator not supported",
    ErrorCode.E0405: "unknown capability",
    ErrorCode.E0600: "unary operator not supported",
}


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.WARNING: "\033[93m",  # Yellow
            DiagnosticLevel.NOTE: "\033[96m",  # Cyan
            DiagnosticLevel.HELP: "\033[92m",  # Green
        }
        return colors.get(self, "")


@dataclass
class Diagnostic:
    """
    A diagnostic message with notes and help lines.

    Attributes:
        code: Error code (e.g., "E0277")
        level: Severity level
        message: The main diagnostic message
        notes: Additional notes, one per missing axiom for capability errors
        helps: Help messages
    """

    code: str
    level: DiagnosticLevel
    message: str
    notes: list[str] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    def render(self, use_color: Optional[bool] = None) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            use_color: Whether to use ANSI color codes; defaults to the
                active settings

        Returns:
            A formatted multi-line string representation
        """
        if use_color is None:
            from axiomatic.config import get_settings

            use_color = get_settings().color

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""

        level_str = self.level.value
        if self.code:
            header = f"{level_color}{bold}{level_str}[{self.code}]{reset}: {bold}{self.message}{reset}"
        else:
            header = f"{level_color}{bold}{level_str}{reset}: {bold}{self.message}{reset}"
        lines = [header]

        for note in self.notes:
            lines.append(f"   {blue}={reset} {bold}note:{reset} {note}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get a simple one-line error message."""
        return f"[{self.code}] {self.message}"


# =============================================================================
# Diagnostic Builder (Fluent API)
# =============================================================================


class DiagnosticBuilder:
    """
    Fluent builder for constructing Diagnostic objects.

        DiagnosticBuilder.error(ErrorCode.E0277, "bound not satisfied")
            .note("missing `f64: One`")
            .help("required by `F: One` in `scale`")
            .build()
    """

    def __init__(self, code: str, level: DiagnosticLevel, message: str) -> None:
        self._code = code
        self._level = level
        self._message = message
        self._notes: list[str] = []
        self._helps: list[str] = []

    @classmethod
    def error(cls, code: str, message: str) -> DiagnosticBuilder:
        """Create an error diagnostic builder."""
        return cls(code, DiagnosticLevel.ERROR, message)

    @classmethod
    def warning(cls, code: str, message: str) -> DiagnosticBuilder:
        """Create a warning diagnostic builder."""
        return cls(code, DiagnosticLevel.WARNING, message)

    def note(self, message: str) -> DiagnosticBuilder:
        """Add a note."""
        self._notes.append(message)
        return self

    def help(self, message: str) -> DiagnosticBuilder:
        """Add a help message."""
        self._helps.append(message)
        return self

    def build(self) -> Diagnostic:
        """Build the diagnostic."""
        return Diagnostic(
            code=self._code,
            level=self._level,
            message=self._message,
            notes=list(self._notes),
            helps=list(self._helps),
        )


# =============================================================================
# String Similarity (Levenshtein Distance)
# =============================================================================


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    Args:
        s1: First string
        s2: Second string

    Returns:
        The edit distance as an integer
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    # Use two rows for space efficiency
    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def suggest_similar(
    name: str,
    candidates: Sequence[str],
    max_distance: int = 3,
    max_suggestions: int = 3,
) -> list[str]:
    """
    Find similar names from a list of candidates, closest first.

    Comparison is case-insensitive and ignores underscores, so
    ``additive_identity`` matches ``AdditiveIdentity``.
    """
    if not candidates:
        return []

    def normalize(s: str) -> str:
        return s.replace("_", "").lower()

    scored = []
    for candidate in candidates:
        if abs(len(normalize(candidate)) - len(normalize(name))) > max_distance:
            continue

        distance = levenshtein_distance(normalize(name), normalize(candidate))
        if distance <= max_distance:
            scored.append((candidate, distance))

    scored.sort(key=lambda x: (x[1], x[0]))

    return [candidate for candidate, _ in scored[:max_suggestions]]


# =============================================================================
# Helper Functions for Common Diagnostics
# =============================================================================


def create_unsatisfied_bound_diagnostic(
    bound: str,
    missing: Sequence[tuple[str, str]],
    required_by: Optional[str] = None,
) -> Diagnostic:
    """
    Create a diagnostic for an unsatisfied capability bound.

    Args:
        bound: The rendered bound, e.g. "Complex[f64]: VectorSpace[f64]"
        missing: (obligation, reason) pairs for each failed axiom
        required_by: Where the bound came from, e.g. "`V: VectorSpace[F]` in `axpy`"
    """
    builder = DiagnosticBuilder.error(ErrorCode.E0277, f"the bound `{bound}` is not satisfied")
    for obligation, reason in missing:
        if reason:
            builder.note(f"missing `{obligation}`: {reason}")
        else:
            builder.note(f"missing `{obligation}`")
    if required_by:
        builder.help(f"required by {required_by}")
    return builder.build()


def create_unsupported_operator_diagnostic(
    symbol: str, left: str, right: Optional[str] = None
) -> Diagnostic:
    """Create a diagnostic for an operator the operand type does not support."""
    if right is None:
        return (
            DiagnosticBuilder.error(ErrorCode.E0600, f"cannot apply unary operator `{symbol}` to `{left}`")
            .build()
        )
    return (
        DiagnosticBuilder.error(ErrorCode.E0369, f"cannot apply `{left} {symbol} {right}`")
        .note(f"`{left}` does not support `{symbol} {right}`")
        .build()
    )


def create_unknown_capability_diagnostic(name: str, candidates: Sequence[str]) -> Diagnostic:
    """Create a diagnostic for an unknown capability name with suggestions."""
    builder = DiagnosticBuilder.error(ErrorCode.E0405, f"cannot find capability `{name}`")
    similar = suggest_similar(name, candidates)
    if similar:
        if len(similar) == 1:
            builder.help(f"did you mean `{similar[0]}`?")
        else:
            options = ", ".join(f"`{s}`" for s in similar)
            builder.help(f"did you mean one of: {options}?")
    return builder.build()
