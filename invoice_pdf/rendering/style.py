# invoice_pdf/rendering/style.py
from __future__ import annotations

from dataclasses import dataclass

from invoice_pdf.models import (
    CompanyAddress,
    CompanyConfig,
    FontConfig,
    StylingConfig,
    TemplateConfig,
)
from invoice_pdf.rendering.canvas import resolve_font_pair
from invoice_pdf.rendering.colors import ColorScheme

JURISDICTION_FALLBACK = "the respective"


@dataclass(frozen=True)
class StyleDefaults:
    """Hardcoded per-template fallbacks for every optional config field."""

    company_name: str = "Your Company Name"
    legal_name: str = "Legal Entity Name"
    address_line1: str = "Address Line 1"
    address_line2: str = ""
    gstin: str = "GSTIN Number"

    font_family: str = "Helvetica"
    title_size: float = 32
    heading_size: float = 18
    body_size: float = 11
    table_size: float = 8

    header_text_color: str = "#ffffff"


@dataclass(frozen=True)
class CompanyStyle:
    name: str
    legal_name: str
    address_line1: str
    address_line2: str
    city: str
    state: str
    pincode: str
    gstin: str
    logo: str | None
    signature: str | None
    include_signature: bool
    email: str | None

    @property
    def city_state_pin(self) -> str:
        out = self.city
        if self.state:
            out += ", " + self.state
        if self.pincode:
            out += " - " + self.pincode
        return out.strip()

    @property
    def jurisdiction(self) -> str:
        return self.state or JURISDICTION_FALLBACK


@dataclass(frozen=True)
class FontStyle:
    regular: str
    bold: str
    title_size: float
    heading_size: float
    body_size: float
    table_size: float


@dataclass(frozen=True)
class HeaderStyle:
    banner_color: str
    document_banner_color: str
    table_header_color: str
    text_color: str


@dataclass(frozen=True)
class StyleConfig:
    company: CompanyStyle
    fonts: FontStyle
    header: HeaderStyle


def resolve_style(config: TemplateConfig | None, defaults: StyleDefaults, colors: ColorScheme) -> StyleConfig:
    """
    Single merge step: config values win, template defaults fill the rest.
    Banner colors default to the resolved palette.
    """
    config = config or TemplateConfig()
    company = config.company or CompanyConfig()
    addr = company.address or CompanyAddress()
    fonts = config.fonts or FontConfig()
    styling = config.styling or StylingConfig()

    regular, bold = resolve_font_pair(fonts.family or defaults.font_family)

    return StyleConfig(
        company=CompanyStyle(
            name=company.name or defaults.company_name,
            legal_name=company.legal_name or defaults.legal_name,
            address_line1=addr.line1 if addr.line1 is not None else defaults.address_line1,
            address_line2=addr.line2 if addr.line2 is not None else defaults.address_line2,
            city=addr.city or "",
            state=addr.state or "",
            pincode=addr.pincode or "",
            gstin=company.gstin or defaults.gstin,
            logo=company.logo,
            signature=company.signature,
            include_signature=company.include_signature is not False,
            email=company.email,
        ),
        fonts=FontStyle(
            regular=regular,
            bold=bold,
            title_size=fonts.title_size or defaults.title_size,
            heading_size=fonts.heading_size or defaults.heading_size,
            body_size=fonts.body_size or defaults.body_size,
            table_size=fonts.table_size or defaults.table_size,
        ),
        header=HeaderStyle(
            banner_color=styling.header_background_color or colors.primary,
            document_banner_color=styling.document_header_bg_color or styling.header_background_color or colors.primary,
            table_header_color=styling.table_header_bg_color or colors.primary,
            text_color=styling.header_text_color or defaults.header_text_color,
        ),
    )
