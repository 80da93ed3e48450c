from __future__ import annotations
import argparse, sys, difflib
from pathlib import Path
from typing import Callable, Dict, List

import pyperclip

from .config import FormatConfig, build_config
from .formatter import _normalize_eol, format_code, deformat_code, deformat_inner_n_brackets, deformat_for_dialog

# ------------------------------ Utilities ------------------------------
def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")

def _write_text(path: Path, data: str) -> None:
    # Normalize to LF
    data = _normalize_eol(data)
    if not data.endswith("\n"):
        data += "\n"
    path.write_text(data, encoding="utf-8")

# ------------------------------ Modes ------------------------------
Transform = Callable[[str, FormatConfig], str]

MODES: Dict[str, Transform] = {
    "format":   lambda text, cfg: format_code(text, cfg.indent_unit),
    "deformat": lambda text, cfg: deformat_code(text),
    "preview":  lambda text, cfg: deformat_inner_n_brackets(text, cfg.depth, cfg.indent_unit),
    "dialog":   lambda text, cfg: deformat_for_dialog(
        text, cfg.depth, cfg.max_lines, cfg.max_line_length, cfg.indent_unit),
}

def _build_config(args) -> FormatConfig:
    return build_config({
        "indent": args.indent,
        "depth": args.depth,
        "max_lines": args.max_lines,
        "max_line_length": args.max_line_length,
    })

def _expand_files(patterns: List[str]) -> List[Path]:
    out: List[Path] = []
    for pat in patterns:
        if any(ch in pat for ch in "*?[]"):
            out.extend(sorted(p for p in Path().glob(pat) if p.is_file()))
        else:
            p = Path(pat)
            if p.is_file():
                out.append(p)
            else:
                print(f"setfmt: no such file: {pat}", file=sys.stderr)
    seen, uniq = set(), []
    for p in out:
        rp = p.resolve()
        if rp not in seen:
            seen.add(rp); uniq.append(p)
    return uniq

def _process_text(text: str, mode: str, cfg: FormatConfig) -> str:
    return MODES[mode](_normalize_eol(text), cfg)

def _run_single(args, cfg: FormatConfig) -> int:
    try:
        text = pyperclip.paste() if args.paste else sys.stdin.read()
    except pyperclip.PyperclipException as ex:
        print(f"setfmt: clipboard error: {ex}", file=sys.stderr)
        return 1
    result = _process_text(text, args.mode, cfg)
    sys.stdout.write(result)
    if not result.endswith("\n"):
        sys.stdout.write("\n")
    if args.copy:
        try:
            pyperclip.copy(result)
        except pyperclip.PyperclipException as ex:
            print(f"setfmt: clipboard error: {ex}", file=sys.stderr)
            return 1
    return 0

# ------------------------------ CLI ------------------------------
def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    ap = argparse.ArgumentParser(prog="setfmt", description="Set-command formatter (setfmt)")
    ap.add_argument("paths", nargs="*", help="Files or globs to process")
    ap.add_argument("--mode", "-m", choices=sorted(MODES), default="format",
                    help="format (default), deformat, preview (depth-limited) or dialog")
    ap.add_argument("--write", "-w", action="store_true", help="Write changes to files")
    ap.add_argument("--check", action="store_true", help="Exit 1 if any files would be changed")
    ap.add_argument("--diff", action="store_true", help="Show unified diff for changes")
    ap.add_argument("--stdin", action="store_true", help="Read from stdin and write to stdout")
    ap.add_argument("--paste", action="store_true", help="Read from the clipboard and write to stdout")
    ap.add_argument("--copy", action="store_true", help="Also copy the stdin/clipboard result to the clipboard")
    ap.add_argument("--indent", type=int, help="Spaces per nesting level (default 4)")
    ap.add_argument("--depth", type=int, help="Collapse brackets this deep in preview/dialog (default 1)")
    ap.add_argument("--max-lines", type=int, help="Dialog line cap (default 15)")
    ap.add_argument("--max-line-length", type=int, help="Dialog line length cap (default 120)")
    args = ap.parse_args(argv)

    try:
        cfg = _build_config(args)
    except (TypeError, ValueError) as ex:
        print(f"setfmt: invalid configuration: {ex}", file=sys.stderr)
        return 2

    if args.stdin or args.paste:
        return _run_single(args, cfg)

    files = _expand_files(args.paths) if args.paths else []
    if not files:
        print("setfmt: No input files. Provide paths or use --stdin.", file=sys.stderr)
        return 2

    changed = 0
    for f in files:
        try:
            original = _read_text(f)
        except (OSError, UnicodeDecodeError) as ex:
            print(f"{f}: error: {ex}", file=sys.stderr)
            continue
        processed = _process_text(original, args.mode, cfg)
        if not processed.endswith("\n"):
            processed += "\n"

        norm_original = _normalize_eol(original)
        if not norm_original.endswith("\n"):
            norm_original += "\n"

        if processed != norm_original:
            changed += 1
            if args.diff and not args.write:
                diff = difflib.unified_diff(
                    norm_original.splitlines(keepends=True),
                    processed.splitlines(keepends=True),
                    fromfile=str(f),
                    tofile=f"{f} ({args.mode})",
                )
                sys.stdout.writelines(diff)
            if args.write:
                try:
                    _write_text(f, processed)
                except OSError as ex:
                    print(f"{f}: error: {ex}", file=sys.stderr)
        if not (args.write or args.check or args.diff):
            sys.stdout.write(processed)

    if args.check and changed:
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
