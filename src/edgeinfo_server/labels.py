"""Display strings for the HTML page, per locale."""
from __future__ import annotations

import re
from typing import Dict

_CAPITAL = re.compile(r"([A-Z])")

# Keys whose camel-case split would read badly.
_HEADER_KEYS = {
    "cfConnectingIP": "CF-Connecting-IP",
    "xForwardedFor": "X-Forwarded-For",
    "xRealIP": "X-Real-IP",
    "cfRay": "CF-Ray",
    "cfVisitor": "CF-Visitor",
    "cfCountry": "CF-IPCountry",
}

KEY_LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        **_HEADER_KEYS,
        "address": "IP Address",
        "userAgent": "User Agent",
        "acceptLanguage": "Accept Language",
        "accept": "Accept",
        "acceptEncoding": "Accept Encoding",
        "referer": "Referer",
        "origin": "Origin",
    },
    "zh-CN": {
        **_HEADER_KEYS,
        "address": "IP 地址",
        "userAgent": "用户代理",
        "acceptLanguage": "接受语言",
        "accept": "接受类型",
        "acceptEncoding": "接受编码",
        "referer": "来源页面",
        "origin": "来源域",
    },
}

UI_STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "IP Address Lookup",
        "subtitle": "Your IP address and network details, straight from the edge",
        "action_api": "JSON API",
        "action_reload": "Refresh",
        "action_copy_all": "Copy all",
        "card_ip": "IP Address",
        "card_location": "Location",
        "card_network": "Network",
        "card_protocol": "HTTP/TLS Protocol",
        "card_request": "Request",
        "card_request_headers": "HTTP Request Headers",
        "card_bot_management": "Bot Management",
        "map_link": "Show on map",
        "not_provided": "not provided",
        "raw_json": "Raw JSON",
        "expand": "Expand",
        "collapse": "Collapse",
        "copy_json": "Copy JSON",
        "copied_json": "JSON copied to clipboard!",
        "copied_all": "All information copied to clipboard!",
        "copy_failed": "Copy failed, please copy manually",
        "degraded": "Connection metadata is unavailable; showing request headers only.",
        "footer": "Served from the edge | Data provided by the hosting network",
        "footer_note": "Real-time | Nothing to install | Free",
    },
    "zh-CN": {
        "title": "IP 地址查询工具",
        "subtitle": "实时获取您的 IP 地址及详细网络信息",
        "action_api": "JSON API",
        "action_reload": "刷新数据",
        "action_copy_all": "复制全部信息",
        "card_ip": "IP 地址信息",
        "card_location": "地理位置信息",
        "card_network": "网络信息",
        "card_protocol": "HTTP/TLS 协议",
        "card_request": "请求信息",
        "card_request_headers": "HTTP 请求头",
        "card_bot_management": "Bot 管理信息",
        "map_link": "在地图上查看位置",
        "not_provided": "未提供",
        "raw_json": "原始 JSON 数据",
        "expand": "展开",
        "collapse": "收起",
        "copy_json": "复制 JSON",
        "copied_json": "JSON 数据已复制到剪贴板！",
        "copied_all": "所有信息已复制到剪贴板！",
        "copy_failed": "复制失败，请手动复制",
        "degraded": "连接元数据不可用，仅显示请求头信息。",
        "footer": "由边缘网络驱动 | 数据来自托管网络",
        "footer_note": "实时查询 | 无需安装 | 完全免费",
    },
}


def humanize_key(key: str) -> str:
    """tlsClientHelloLength -> Tls Client Hello Length"""
    spaced = _CAPITAL.sub(r" \1", key)
    return (spaced[:1].upper() + spaced[1:]).strip()


def key_label(key: str, locale: str = "en") -> str:
    return KEY_LABELS.get(locale, KEY_LABELS["en"]).get(key) or humanize_key(key)


def ui_strings(locale: str = "en") -> Dict[str, str]:
    return UI_STRINGS.get(locale, UI_STRINGS["en"])
