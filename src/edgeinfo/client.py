from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def parse_header_options(values: List[str]) -> Dict[str, str]:
    """Turn repeated "Name: value" options into a header mapping."""
    headers: Dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"header must look like 'Name: value', got {raw!r}")
        try:
            raw.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError(f"header must be Latin-1 encodable, got {raw!r}") from None
        headers[name.strip()] = value.strip()
    return headers


def load_metadata(path: Optional[Path]) -> Optional[Dict[str, Any]]:
    if path is None:
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


def fetch_info(base_url: str, *, full: bool = False, timeout_s: float = 10.0) -> Dict[str, Any]:
    url = f"{base_url.rstrip('/')}/{'api' if full else 'ip'}"
    with httpx.Client(timeout=timeout_s, follow_redirects=True) as client:
        r = client.get(url, headers={"Accept": "application/json"})
        r.raise_for_status()
        return r.json()


def _cell(value: Any) -> str:
    if value is None:
        return "[dim]-[/dim]"
    if isinstance(value, (dict, list)):
        return escape(json.dumps(value, ensure_ascii=False))
    return escape(str(value))


def _render_group(title: str, data: Mapping[str, Any]) -> None:
    table = Table(title=escape(title), show_header=False, box=None, pad_edge=False, title_justify="left")
    for k, v in data.items():
        table.add_row(f"[bold]{escape(str(k))}[/bold]", _cell(v))
    console.print(table)
    console.print("-" * 60)


def render_info(info: Mapping[str, Any]) -> None:
    """Print a /ip or /api payload as tables, one per group."""
    flat = {k: v for k, v in info.items() if not isinstance(v, dict)}
    if flat:
        _render_group("ip", flat)
    for key, value in info.items():
        if isinstance(value, dict):
            _render_group(key, value)
