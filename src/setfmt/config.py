from __future__ import annotations
import json, sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

CONFIG_FILENAME = "setfmt.config.json"

@dataclass
class FormatConfig:
    indent: int = 4               # spaces per nesting level
    depth: int = 1                # brackets this deep (or shallower) collapse in previews
    max_lines: int = 15           # dialog line cap
    max_line_length: int = 120    # dialog per-line cap, ellipsis included

    def __post_init__(self) -> None:
        for name in ("indent", "depth", "max_lines", "max_line_length"):
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {value!r}")
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")
        if self.max_lines < 1:
            raise ValueError(f"max_lines must be >= 1, got {self.max_lines}")
        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be >= 1, got {self.max_line_length}")

    @property
    def indent_unit(self) -> str:
        return " " * self.indent

DEFAULT_CONFIG: Dict[str, Any] = {
    "indent": 4,
    "depth": 1,
    "max_lines": 15,
    "max_line_length": 120,
}

_FIELD_NAMES = frozenset(f.name for f in fields(FormatConfig))

def load_project_config(start_dir: Path) -> Dict[str, Any]:
    """Settings from the nearest setfmt.config.json at or above `start_dir`."""
    cur = start_dir.resolve()
    root = Path(cur.anchor)
    while True:
        p = cur / CONFIG_FILENAME
        if p.is_file():
            try:
                data = json.loads(p.read_text(encoding="utf-8"))
            except (OSError, ValueError) as ex:
                print(f"setfmt: warning: ignoring {p}: {ex}", file=sys.stderr)
                return {}
            if not isinstance(data, dict):
                print(f"setfmt: warning: ignoring {p}: expected a JSON object", file=sys.stderr)
                return {}
            unknown = sorted(k for k in data if k not in _FIELD_NAMES)
            if unknown:
                print(f"setfmt: warning: {p}: unknown keys {', '.join(unknown)}", file=sys.stderr)
            return {k: v for k, v in data.items() if k in _FIELD_NAMES}
        if cur == root:
            break
        cur = cur.parent
    return {}

def build_config(overrides: Optional[Mapping[str, Any]] = None,
                 start_dir: Optional[Path] = None) -> FormatConfig:
    """Defaults, then the project file, then any explicit (non-None) overrides."""
    cfg = DEFAULT_CONFIG.copy()
    cfg.update(load_project_config(start_dir if start_dir is not None else Path.cwd()))
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return FormatConfig(**cfg)
