from sasswatch.domain.models import ChangeBatch, CompileResult
from sasswatch.domain.partials import (
    PARTIAL_MARKER,
    is_partial,
    is_stylesheet,
    partial_target_name,
    strip_root,
)

__all__ = [
    "PARTIAL_MARKER",
    "ChangeBatch",
    "CompileResult",
    "is_partial",
    "is_stylesheet",
    "partial_target_name",
    "strip_root",
]
