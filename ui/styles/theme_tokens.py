from __future__ import annotations


LIGHT_THEME = {
    "COLOR_BG_SURFACE": "#FFFFFF",
    "COLOR_BG_SURFACE_ALT": "#F8FAFC",
    "COLOR_BG_WEEKEND": "#F1F5F9",
    "COLOR_BORDER": "#D7E0EA",
    "COLOR_TEXT_PRIMARY": "#1F2937",
    "COLOR_TEXT_SECONDARY": "#4B5563",
    "COLOR_TEXT_MUTED": "#6B7280",
    "COLOR_ACCENT": "#1D4ED8",
    "COLOR_ACCENT_SOFT": "#DBEAFE",
    "COLOR_BAR": "#3B82F6",
    "COLOR_BAR_PROGRESS": "#1E3A8A",
    "COLOR_CRITICAL": "#B42318",
    "COLOR_BASELINE": "#94A3B8",
    "COLOR_CONNECTOR": "#64748B",
    "COLOR_TODAY": "#B45309",
    "COLOR_MILESTONE": "#0F766E",
}


DARK_THEME = {
    "COLOR_BG_SURFACE": "#111A2C",
    "COLOR_BG_SURFACE_ALT": "#16243A",
    "COLOR_BG_WEEKEND": "#1A2A42",
    "COLOR_BORDER": "#29405C",
    "COLOR_TEXT_PRIMARY": "#E5EDF8",
    "COLOR_TEXT_SECONDARY": "#B9C7DC",
    "COLOR_TEXT_MUTED": "#91A4C2",
    "COLOR_ACCENT": "#60A5FA",
    "COLOR_ACCENT_SOFT": "#1E3A5F",
    "COLOR_BAR": "#3B82F6",
    "COLOR_BAR_PROGRESS": "#93C5FD",
    "COLOR_CRITICAL": "#F87171",
    "COLOR_BASELINE": "#4C678A",
    "COLOR_CONNECTOR": "#91A4C2",
    "COLOR_TODAY": "#F59E0B",
    "COLOR_MILESTONE": "#34D399",
}


def theme_tokens(mode: str = "light") -> dict[str, str]:
    normalized = (mode or "light").strip().lower()
    return dict(DARK_THEME if normalized == "dark" else LIGHT_THEME)


__all__ = ["LIGHT_THEME", "DARK_THEME", "theme_tokens"]
