"""Cytoscape stylesheet and language color mappings for exported graphs."""

from __future__ import annotations

from typing import Any

LANGUAGE_COLORS: dict[str, str] = {
    "python": "#3572A5",
    "javascript": "#F1E05A",
    "typescript": "#3178C6",
    "tsx": "#3178C6",
    "vue": "#41B883",
    "svelte": "#FF3E00",
    "go": "#00ADD8",
    "rust": "#DEA584",
    "java": "#B07219",
    "kotlin": "#A97BFF",
    "scala": "#C22D40",
    "ruby": "#701516",
    "php": "#4F5D95",
    "dart": "#00B4AB",
    "lua": "#000080",
    "perl": "#0298C3",
    "shell": "#89E051",
    "c": "#555555",
    "cpp": "#F34B7D",
    "objc": "#438EFF",
    "css": "#563D7C",
    "scss": "#C6538C",
    "less": "#1D365D",
    "html": "#E34C26",
    "json": "#292929",
    "markdown": "#083FA1",
}

_DEFAULT_COLOR = "#888888"


def language_color(language: str | None) -> str:
    """Return hex color for a language name."""
    if language is None:
        return _DEFAULT_COLOR
    return LANGUAGE_COLORS.get(language, _DEFAULT_COLOR)


GRAPH_STYLESHEET: list[dict[str, Any]] = [
    {
        "selector": "node",
        "style": {
            "label": "data(label)",
            "font-size": "10px",
            "text-valign": "center",
            "text-halign": "center",
            "background-color": "data(color)",
            "width": "mapData(size, 4, 24, 20, 80)",
            "height": "mapData(size, 4, 24, 20, 80)",
        },
    },
    {
        "selector": "node:selected",
        "style": {
            "border-width": 3,
            "border-color": "#FF5722",
        },
    },
    {
        "selector": "edge",
        "style": {
            "curve-style": "bezier",
            "line-color": "#ccc",
            "target-arrow-color": "#ccc",
            "target-arrow-shape": "triangle",
            "width": 1,
        },
    },
]
