"""
Axiomatic Utilities Package.

Error types and diagnostics.
"""

from axiomatic.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticBuilder,
    DiagnosticLevel,
    ErrorCode,
    create_unknown_capability_diagnostic,
    create_unsatisfied_bound_diagnostic,
    create_unsupported_operator_diagnostic,
    levenshtein_distance,
    suggest_similar,
)
from axiomatic.utils.errors import (
    AxiomaticError,
    CapabilityError,
    OperatorNotSupportedError,
    TypeMismatchError,
    UnknownCapabilityError,
)

__all__ = [
    # Errors
    "AxiomaticError",
    "CapabilityError",
    "OperatorNotSupportedError",
    "TypeMismatchError",
    "UnknownCapabilityError",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "Diagnostic",
    "DiagnosticBuilder",
    "levenshtein_distance",
    "suggest_similar",
    "create_unsatisfied_bound_diagnostic",
    "create_unsupported_operator_diagnostic",
    "create_unknown_capability_diagnostic",
]
