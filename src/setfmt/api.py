from __future__ import annotations
from dataclasses import replace
from typing import Optional
from .config import FormatConfig
from .formatter import format_code, deformat_code, deformat_inner_n_brackets, deformat_for_dialog

# Default config mirrors the modding tool's own layout
DEFAULT_CFG = FormatConfig()

def _cfg(**overrides: Optional[int]) -> FormatConfig:
    given = {k: v for k, v in overrides.items() if v is not None}
    return replace(DEFAULT_CFG, **given) if given else DEFAULT_CFG

def format_text(text: str, *, indent: Optional[int] = None) -> str:
    """Pretty-print a set command over indented lines."""
    return format_code(text, _cfg(indent=indent).indent_unit)

def deformat_text(text: str) -> str:
    """Compact form of a command (the stored representation)."""
    return deformat_code(text)

def preview_text(text: str, *, depth: Optional[int] = None, indent: Optional[int] = None) -> str:
    """Pretty-print, collapsing brackets nested no deeper than `depth`."""
    cfg = _cfg(depth=depth, indent=indent)
    return deformat_inner_n_brackets(text, cfg.depth, cfg.indent_unit)

def dialog_text(
    text: str,
    *,
    depth: Optional[int] = None,
    max_lines: Optional[int] = None,
    max_line_length: Optional[int] = None,
    indent: Optional[int] = None,
) -> str:
    """`<pre>` preview capped to `max_lines` lines of at most `max_line_length` characters."""
    cfg = _cfg(depth=depth, max_lines=max_lines, max_line_length=max_line_length, indent=indent)
    return deformat_for_dialog(text, cfg.depth, cfg.max_lines, cfg.max_line_length, cfg.indent_unit)
