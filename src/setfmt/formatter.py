from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

INDENTATION = "    "

# ------------------------------ Utilities ------------------------------
_QUOTED_RE = re.compile(r'"[^"]*"?')
_NUMERIC_TUPLE_RE = re.compile(r"\([\d ,]*\)")
_SET_LINE_RE = re.compile(r"set(?:_cmp)?\s")
# quoted regions are matched first so keywords inside them are left alone
_SET_COMMAND_RE = re.compile(r'"[^"]*"?|\s(set(?:_cmp)?)(?=\s)')
_UNQUOTED_SPACE_RE = re.compile(r'"[^"]*"?|[ \r\n]+')

def _normalize_eol(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")

def _quoted_end(text: str, i: int) -> int:
    """Index just past the quoted region opened at text[i] (end-of-text if unterminated)."""
    return _QUOTED_RE.match(text, i).end()

def _next_non_space(text: str, i: int) -> int:
    while i < len(text) and text[i] == " ":
        i += 1
    return i

def _strip_trailing_spaces(out: List[str]) -> None:
    while out and out[-1] == " ":
        out.pop()

def _strip_trailing_whitespace(out: List[str]) -> None:
    while out and out[-1].isspace():
        out.pop()

def _last_non_space(out: List[str]) -> Optional[str]:
    k = len(out) - 1
    while k >= 0 and out[k].isspace():
        k -= 1
    return out[k] if k >= 0 else None

def _newline(out: List[str], depth: int, indent: str) -> None:
    out.append("\n")
    out.extend(indent * depth)

def _line_starts_with_set(out: List[str]) -> bool:
    k = len(out)
    while k > 0 and out[k - 1] != "\n":
        k -= 1
    return _SET_LINE_RE.match("".join(out[k:k + 8])) is not None

def _put_set_commands_on_new_lines(text: str) -> str:
    def repl(m: "re.Match[str]") -> str:
        if m.group(1) is None:
            return m.group(0)
        return "\n\n" + m.group(1)
    return _SET_COMMAND_RE.sub(repl, text)

# ------------------------------ Formatting ------------------------------
def format_code(text: str, indent: str = INDENTATION) -> str:
    """Lay a compact command out over indented lines, one argument per line."""
    src = _normalize_eol(text).replace("\n", " ").strip(" ")
    out: List[str] = []
    depth = 0
    i = 0; n = len(src)
    while i < n:
        ch = src[i]
        if ch == "(":
            m = _NUMERIC_TUPLE_RE.match(src, i)
            if m:
                # coordinate/colour tuples stay on one line
                out.extend(m.group(0)); i = m.end(); continue
            plus = bool(out) and out[-1] == "+"
            if plus: out.pop()
            _strip_trailing_spaces(out)
            _newline(out, depth, indent)
            if plus: out.append("+")
            out.append(ch); depth += 1
            j = _next_non_space(src, i + 1)
            if j < n and src[j] != "(":
                _newline(out, depth, indent)
        elif ch == ")":
            if depth == 0:
                out.append(ch)
            else:
                _strip_trailing_spaces(out)
                depth -= 1
                _newline(out, depth, indent)
                out.append(ch)
                if depth == 0:
                    out.extend("\n\n")
        elif ch == "=":
            if _line_starts_with_set(out):
                out.append(ch)
            else:
                if out and not out[-1].isspace(): out.append(" ")
                out.extend("= ")
        elif ch == ",":
            out.append(ch)
            j = _next_non_space(src, i + 1)
            if depth > 0 and j < n and src[j] != "(":
                _newline(out, depth, indent)
        elif ch == " ":
            if out and not out[-1].isspace(): out.append(ch)
        elif ch == '"':
            end = _quoted_end(src, i)
            out.extend(src[i:end]); i = end; continue
        else:
            out.append(ch)
        i += 1
    return _put_set_commands_on_new_lines("".join(out))

def deformat_code(text: str) -> str:
    """Compact form: drop every space and newline that is not inside quotes."""
    def repl(m: "re.Match[str]") -> str:
        s = m.group(0)
        return s if s.startswith('"') else ""
    return _UNQUOTED_SPACE_RE.sub(repl, text)

# ------------------------------ Depth-limited view ------------------------------
@dataclass
class BracketSpan:
    start: int
    end: int            # index of the matching ")", or len(text) when unterminated
    max_depth: int = 1
    terminated: bool = False

def scan_bracket_spans(text: str) -> Tuple[List[BracketSpan], int]:
    """Return every bracket span of `text` in start order, plus the deepest nesting seen.

    Quoted regions are skipped; a ")" with nothing open is ignored.
    """
    spans: List[BracketSpan] = []
    stack: List[BracketSpan] = []
    deepest = 0
    i = 0; n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            i = _quoted_end(text, i); continue
        if ch == "(":
            depth = len(stack) + 1
            for k, parent in enumerate(stack):
                parent.max_depth = max(parent.max_depth, depth - k)
            span = BracketSpan(start=i, end=n)
            stack.append(span); spans.append(span)
            deepest = max(deepest, depth)
        elif ch == ")" and stack:
            span = stack.pop()
            span.end = i; span.terminated = True
        i += 1
    return spans, deepest

def deformat_inner_n_brackets(text: str, n: int, indent: str = INDENTATION) -> str:
    """Pretty-print `text`, then collapse every bracket span at most `n` levels deep."""
    pretty = format_code(text, indent)
    spans, deepest = scan_bracket_spans(pretty)
    selected: Dict[int, BracketSpan] = {
        s.start: s for s in spans
        if s.max_depth <= n or (s.max_depth == deepest and deepest < n)
    }
    out: List[str] = []
    i = 0
    while i < len(pretty):
        span = selected.get(i)
        if span is None:
            out.append(pretty[i]); i += 1; continue
        if _last_non_space(out) == "=":
            _strip_trailing_whitespace(out)
        out.extend(deformat_code(pretty[span.start:span.end]).strip())
        i = span.end
    return "".join(out)

# ------------------------------ Dialog ------------------------------
def deformat_for_dialog(
    text: str,
    n: int = 1,
    max_lines: int = 15,
    max_line_length: int = 120,
    indent: str = INDENTATION,
) -> str:
    """Bounded `<pre>` preview of a command for tooltips and message dialogs."""
    hybrid = deformat_inner_n_brackets(text, n, indent)
    parts: List[str] = ["<pre>"]
    for count, line in enumerate(hybrid.rstrip("\n").split("\n"), 1):
        if count > max_lines:
            parts.append("..."); break
        if len(line) > max_line_length:
            line = line[:max(0, max_line_length - 3)] + "..."
        parts.append(line + "<br/>")
    parts.append("</pre>")
    return "".join(parts)
