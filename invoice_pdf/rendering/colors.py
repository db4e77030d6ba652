# invoice_pdf/rendering/colors.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace

from invoice_pdf.models import ColorConfig


@dataclass(frozen=True)
class ColorScheme:
    primary: str
    secondary: str
    accent: str
    border: str
    background: str
    success: str
    warning: str
    error: str


def resolve_colors(
    defaults: ColorScheme,
    seed: str | None = None,
    color_config: ColorConfig | None = None,
) -> ColorScheme:
    """
    With a color config, every field comes from the config when set and from
    the template defaults otherwise. Without one, the seed becomes primary.
    """
    if color_config is not None:
        picked = {}
        for f in fields(ColorScheme):
            val = getattr(color_config, f.name, None)
            picked[f.name] = val or getattr(defaults, f.name)
        return ColorScheme(**picked)

    return replace(defaults, primary=seed or defaults.primary)
