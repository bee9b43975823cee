"""Text <-> structured conversion for the gateway's line-based settings.

Two independent formats, one entry per line:

    locale map:   website_locale|processor_locale
    brand list:   title|PM|BRAND

Blank lines and lines with the wrong number of fields are dropped without
error. Whitespace around every field is trimmed, so parse -> format is stable
up to whitespace, not byte-identical to the input.
"""

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

FIELD_SEPARATOR = "|"


class BrandOption(BaseModel):
    """A payment method the buyer may pick before the off-site redirect."""

    model_config = ConfigDict(frozen=True)

    title: str
    method_code: str
    brand_code: str


def _split_lines(text: str, field_count: int) -> list[list[str]]:
    rows = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) != field_count:
            continue
        rows.append([part.strip() for part in parts])
    return rows


def parse_locale_map(text: str) -> dict[str, str]:
    """Parse ``source|target`` lines into a locale map (later lines win)."""
    return {source: target for source, target in _split_lines(text, 2)}


def format_locale_map(mapping: Mapping[str, str]) -> str:
    return "\n".join(f"{source}{FIELD_SEPARATOR}{target}" for source, target in mapping.items())


def parse_brands(text: str) -> list[BrandOption]:
    """Parse ``title|PM|BRAND`` lines into brand options, keeping input order."""
    return [
        BrandOption(title=title, method_code=method_code, brand_code=brand_code)
        for title, method_code, brand_code in _split_lines(text, 3)
    ]


def format_brands(brands: Iterable[BrandOption]) -> str:
    return "\n".join(
        FIELD_SEPARATOR.join((brand.title, brand.method_code, brand.brand_code))
        for brand in brands
    )
