# invoice_pdf/rendering/tax.py
from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from invoice_pdf.models import Totals

_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    t = _NUMERIC_RE.sub("", str(value))
    if not t or t in {"-", ".", "-."}:
        return None
    try:
        return float(t)
    except ValueError:
        return None


def is_present(value: Any) -> bool:
    """
    True when a totals field should be printed: set, non-blank and not zero.
    Non-numeric text counts as present.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str) and not value.strip():
        return False
    num = _as_number(value)
    if num is None:
        return True
    return num != 0


class TaxRegime(str, Enum):
    CGST_SGST = "cgst_sgst"
    IGST = "igst"
    GENERIC = "generic"

    @classmethod
    def from_totals(cls, totals: Totals) -> "TaxRegime":
        if is_present(totals.cgst) and is_present(totals.sgst):
            return cls.CGST_SGST
        if is_present(totals.igst):
            return cls.IGST
        return cls.GENERIC


def format_tax_amount(value: Any) -> str:
    """
    Per-item regime tax amounts arrive as raw numbers: two decimals,
    "0.00" when the value does not parse. Strings parse their leading
    number, so "52.15abc" prints "52.15".
    """
    if value is None or isinstance(value, bool):
        return "0.00"
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        m = _LEADING_NUMBER_RE.match(str(value))
        if m is None:
            return "0.00"
        num = float(m.group(0))
    if math.isnan(num) or math.isinf(num):
        return "0.00"
    return f"{num:.2f}"


def money_text(value: Any) -> str:
    """
    Display money as delivered upstream. Bare numbers get two decimals.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)


def quantity_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return "" if value is None else str(value)
