"""Pretty-printer and compactor for set-style game mod commands."""

from .formatter import (
    BracketSpan,
    deformat_code,
    deformat_for_dialog,
    deformat_inner_n_brackets,
    format_code,
    scan_bracket_spans,
)
from .config import FormatConfig

__version__ = "0.1.0"

__all__ = [
    "BracketSpan",
    "FormatConfig",
    "deformat_code",
    "deformat_for_dialog",
    "deformat_inner_n_brackets",
    "format_code",
    "scan_bracket_spans",
]
