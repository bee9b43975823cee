"""Unit tests for locale map and brand list conversion."""

from payment_callback.processors.configuration import (
    BrandOption,
    format_brands,
    format_locale_map,
    parse_brands,
    parse_locale_map,
)


class TestLocaleMap:
    """Tests for source|target lines."""

    def test_parse_well_formed_lines(self) -> None:
        assert parse_locale_map("en|en_US\nfr|fr_FR") == {"en": "en_US", "fr": "fr_FR"}

    def test_parse_trims_fields(self) -> None:
        assert parse_locale_map("  en | en_US  \r\n\tde|  de_DE") == {"en": "en_US", "de": "de_DE"}

    def test_malformed_lines_dropped(self) -> None:
        text = "en|en_US\nbroken\nfr|fr_FR|extra\n\n   \nnl|nl_NL"

        assert parse_locale_map(text) == {"en": "en_US", "nl": "nl_NL"}

    def test_later_line_wins(self) -> None:
        assert parse_locale_map("en|en_US\nen|en_GB") == {"en": "en_GB"}

    def test_empty_text(self) -> None:
        assert parse_locale_map("") == {}

    def test_format(self) -> None:
        assert format_locale_map({"en": "en_US", "fr": "fr_FR"}) == "en|en_US\nfr|fr_FR"

    def test_round_trip_normalises_whitespace(self) -> None:
        text = " en |en_US\n\nbad line\nfr|  fr_FR "

        assert format_locale_map(parse_locale_map(text)) == "en|en_US\nfr|fr_FR"

    def test_round_trip_stable(self) -> None:
        normalised = format_locale_map(parse_locale_map(" en |en_US\nfr|fr_FR"))

        assert format_locale_map(parse_locale_map(normalised)) == normalised


class TestBrands:
    """Tests for title|PM|BRAND lines."""

    def test_parse_well_formed_lines(self) -> None:
        brands = parse_brands("Visa|CreditCard|VISA\niDEAL|iDEAL|iDEAL")

        assert brands == [
            BrandOption(title="Visa", method_code="CreditCard", brand_code="VISA"),
            BrandOption(title="iDEAL", method_code="iDEAL", brand_code="iDEAL"),
        ]

    def test_malformed_lines_dropped(self) -> None:
        text = "Visa|CreditCard|VISA\nMastercard|CreditCard\nA|B|C|D\n\nPayPal|PAYPAL|PAYPAL"

        brands = parse_brands(text)

        assert [brand.title for brand in brands] == ["Visa", "PayPal"]

    def test_parse_trims_fields(self) -> None:
        brands = parse_brands("  American Express | CreditCard |AMEX  ")

        assert brands == [
            BrandOption(title="American Express", method_code="CreditCard", brand_code="AMEX")
        ]

    def test_format(self) -> None:
        brands = [BrandOption(title="Visa", method_code="CreditCard", brand_code="VISA")]

        assert format_brands(brands) == "Visa|CreditCard|VISA"

    def test_round_trip_normalises_whitespace(self) -> None:
        text = "Visa | CreditCard | VISA\njunk\n PayPal|PAYPAL|PAYPAL"

        assert format_brands(parse_brands(text)) == "Visa|CreditCard|VISA\nPayPal|PAYPAL|PAYPAL"

    def test_empty_text(self) -> None:
        assert parse_brands("") == []
        assert format_brands([]) == ""
