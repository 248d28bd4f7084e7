"""Veiled placeholder avatars for received cards that are not unlocked yet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableSet, Optional
from urllib.parse import quote

# (background, silhouette)
THEMES: tuple[tuple[str, str], ...] = (
    ("#cfe8ff", "#3b82f6"), ("#ffe4e6", "#e11d48"), ("#e0f2fe", "#0284c7"),
    ("#fef9c3", "#ca8a04"), ("#e9d5ff", "#7c3aed"), ("#dcfce7", "#16a34a"),
    ("#ffedd5", "#ea580c"), ("#f0f9ff", "#0891b2"), ("#fee2e2", "#ef4444"),
    ("#ecfeff", "#06b6d4"), ("#f5f3ff", "#8b5cf6"), ("#faf5ff", "#a855f7"),
    ("#fef2f2", "#f43f5e"), ("#fff7ed", "#f97316"), ("#f0fdf4", "#22c55e"),
    ("#fafaf9", "#64748b"), ("#fefce8", "#eab308"), ("#f1f5f9", "#334155"),
    ("#fff1f2", "#fb7185"), ("#f5f5f4", "#57534e"),
)

_SVG_TEMPLATE = (
    "<svg xmlns='http://www.w3.org/2000/svg' width='480' height='600' viewBox='0 0 480 600'>"
    "<defs>"
    "<filter id='blur'><feGaussianBlur stdDeviation='3'/></filter>"
    "<filter id='noise'><feTurbulence type='fractalNoise' baseFrequency='0.9' numOctaves='2'/></filter>"
    "<radialGradient id='vignette' cx='50%' cy='45%' r='75%'>"
    "<stop offset='55%' stop-color='transparent'/><stop offset='100%' stop-color='rgba(0,0,0,0.85)'/>"
    "</radialGradient>"
    "</defs>"
    "<rect width='100%' height='100%' fill='{bg}'/>"
    "<g fill='{fg}' filter='url(#blur)' opacity='0.85'>"
    "<circle cx='240' cy='220' r='80'/>"
    "<path d='M120,450 Q240,360 360,450 Q360,520 120,520 Z'/>"
    "</g>"
    "<rect width='100%' height='100%' fill='rgba(0,0,0,0.45)'/>"
    "<rect width='100%' height='100%' fill='url(#vignette)'/>"
    "<rect width='100%' height='100%' filter='url(#noise)' opacity='0.07'/>"
    "</svg>"
)


def svg_avatar(bg: str, fg: str) -> str:
    svg = _SVG_TEMPLATE.format(bg=bg, fg=fg)
    return "data:image/svg+xml;utf8," + quote(svg, safe="-_.!~*'()")


DATA_URIS: tuple[str, ...] = tuple(svg_avatar(bg, fg) for bg, fg in THEMES)
LOCAL_PATHS: tuple[str, ...] = tuple(f"/masked-avatars/a{i:02d}.webp" for i in range(1, len(THEMES) + 1))


@dataclass(frozen=True, slots=True)
class MaskedPick:
    src: Optional[str]
    index: int


def djb2(value: str) -> int:
    """32-bit djb2 variant (h * 33 ^ c) over UTF-16 code units."""
    h = 5381
    encoded = value.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = ((h * 33) & 0xFFFFFFFF) ^ code_unit
    return h


def pick_masked_avatar(
    other_user_id: str,
    used: Optional[MutableSet[int]] = None,
    *,
    use_local_assets: bool = False,
) -> MaskedPick:
    """Deterministic avatar for ``other_user_id``.

    When ``used`` is given, the next free index is taken (wrapping around) so a
    page does not show the same veil twice while variants remain, and the chosen
    index is added to ``used``.
    """
    sources = LOCAL_PATHS if use_local_assets else DATA_URIS
    count = len(sources)
    if not count:
        return MaskedPick(src=None, index=-1)

    index = djb2(other_user_id) % count
    if used is not None:
        for _ in range(count):
            if index not in used:
                break
            index = (index + 1) % count
        used.add(index)

    return MaskedPick(src=sources[index], index=index)
