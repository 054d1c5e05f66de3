"""Serialization of extracted request info: JSON text and the HTML page."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

import jinja2

from .labels import key_label, ui_strings
from .settings import Settings

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# Payload key -> (title string id, icon), in page order. The IP card is rendered separately.
GROUP_CARDS: List[Tuple[str, str, str]] = [
    ("location", "card_location", "🌍"),
    ("network", "card_network", "📡"),
    ("protocol", "card_protocol", "🔒"),
    ("request", "card_request", "📋"),
    ("requestHeaders", "card_request_headers", "📨"),
    ("botManagement", "card_bot_management", "🤖"),
]


@dataclass
class Entry:
    key: str
    label: str
    kind: str  # missing | json | scalar
    text: str = ""


@dataclass
class Card:
    key: str
    title: str
    icon: str
    entries: List[Entry] = field(default_factory=list)
    highlight: bool = False
    map_url: Optional[str] = None


def render_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def format_value(value: Any) -> Tuple[str, str]:
    """Classify a leaf for display, returning (kind, text)."""
    if value is None:
        return "missing", ""
    if isinstance(value, Mapping):
        if all(v is None for v in value.values()):
            return "missing", ""
        return "json", render_json(value)
    if isinstance(value, (list, tuple)):
        if all(v is None for v in value):
            return "missing", ""
        return "json", render_json(value)
    if isinstance(value, bool):
        return "scalar", "true" if value else "false"
    return "scalar", str(value)


def build_card(
    key: str,
    title: str,
    icon: str,
    data: Any,
    locale: str,
    highlight: bool = False,
    map_url: Optional[str] = None,
) -> Optional[Card]:
    """A card for one group, or None when the group has no non-null entry."""
    if data is None:
        return None
    if not isinstance(data, Mapping):
        data = {key: data}
    if all(v is None for v in data.values()):
        return None
    entries = []
    for k, v in data.items():
        kind, text = format_value(v)
        entries.append(Entry(key=k, label=key_label(k, locale), kind=kind, text=text))
    return Card(key=key, title=title, icon=icon, entries=entries, highlight=highlight, map_url=map_url)


def location_map_url(location: Any, settings: Settings) -> Optional[str]:
    if not isinstance(location, Mapping):
        return None
    lat, lon = location.get("latitude"), location.get("longitude")
    if lat is None or lon is None:
        return None
    return settings.map_url(quote(str(lat)), quote(str(lon)))


def build_cards(payload: Mapping[str, Any], settings: Settings) -> Tuple[Optional[Card], List[Card]]:
    t = ui_strings(settings.locale)
    ip = payload.get("ip")
    if isinstance(ip, str):
        ip = {"address": ip}
    ip_card = build_card("ip", t["card_ip"], "🖥️", ip, settings.locale, highlight=True)
    cards = []
    for key, title_id, icon in GROUP_CARDS:
        map_url = location_map_url(payload.get(key), settings) if key == "location" else None
        card = build_card(key, t[title_id], icon, payload.get(key), settings.locale, map_url=map_url)
        if card is not None:
            cards.append(card)
    return ip_card, cards


def build_jinja_env(template_dir: Path = TEMPLATE_DIR) -> jinja2.Environment:
    """Jinja2 environment for the page; .html templates are autoescaped."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        autoescape=jinja2.select_autoescape(),
    )
    # Keep the payload's key order in the embedded script literal.
    env.policies["json.dumps_kwargs"] = {"sort_keys": False}
    return env


def render_html(
    payload: Dict[str, Any],
    settings: Settings,
    env: Optional[jinja2.Environment] = None,
) -> str:
    env = env or build_jinja_env()
    t = ui_strings(settings.locale)
    ip_card, cards = build_cards(payload, settings)
    return env.get_template("index.html").render(
        t=t,
        locale=settings.locale,
        service_name=settings.service_name,
        footer=settings.footer_text or t["footer"],
        ip_card=ip_card,
        cards=cards,
        error=payload.get("error"),
        payload=payload,
        payload_json=render_json(payload),
    )
