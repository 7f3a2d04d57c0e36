import logging

import pytest

from langtag.canonicalize import Canonicalizer, ExtensionOrder, canonicalize, order_extensions
from langtag.errors import DomainError, FormatError, LanguageTagErrorMessages
from langtag.parser import parse
from langtag.registry import Category, IanaRegistry, MinimalRegistry, RegistryEntry
from langtag.subtags import SubtagSet


@pytest.mark.parametrize(
    "tag,expected",
    [
        ("en", "en"),
        ("EN-us", "en-US"),
        ("en-Latn-US", "en-US"),
        ("az-arab-az", "az-Arab-AZ"),
        ("JA-JPAN", "ja"),
        ("ja-latn", "ja-Latn"),
        ("he-Hebr-DE", "he-DE"),
        ("es-419", "es-419"),
        ("de-CH-1901", "de-CH-1901"),
        ("sl-ROZAJ-Biske", "sl-rozaj-biske"),
        ("zh-Hant-CN", "zh-Hant-CN"),
        ("az-Arab-x-AZE-derbend", "az-Arab-x-aze-derbend"),
        ("x-Whatever", "x-whatever"),
    ],
)
def test_canonical_form(canonicalizer: Canonicalizer, tag: str, expected: str) -> None:
    canonical = canonicalizer.canonicalize(tag)
    assert str(canonical) == expected
    assert canonical.is_deprecated() is False


class TestPreferredValues:
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("zh-cmn-Hans-CN", "cmn-Hans-CN"),
            ("cmn-Hans-CN", "cmn-Hans-CN"),
            ("iw", "he"),
            ("de-BU", "de-MM"),
            ("ja-Latn-hepburn-heploc", "ja-Latn-hepburn-alalc97"),
        ],
    )
    def test_replacement(self, canonicalizer: Canonicalizer, tag: str, expected: str) -> None:
        canonical = canonicalizer.canonicalize(tag)
        assert str(canonical) == expected
        # a preferred value takes precedence over the deprecated flag
        assert canonical.is_deprecated() is False

    def test_deprecated_without_replacement(self, canonicalizer: Canonicalizer) -> None:
        canonical = canonicalizer.canonicalize("de-DD")
        assert str(canonical) == "de-DD"
        assert canonical.is_deprecated() is True

    def test_replacement_does_not_repeat_variant(self, canonicalizer: Canonicalizer) -> None:
        canonical = canonicalizer.canonicalize("ja-Latn-hepburn-heploc-alalc97")
        assert canonical.variants == ("hepburn", "alalc97")
        assert str(canonical) == "ja-Latn-hepburn-alalc97"
        assert parse(str(canonical)) == parse("ja-Latn-hepburn-alalc97")

    def test_replaced_language_keeps_other_fields(self, canonicalizer: Canonicalizer) -> None:
        assert str(canonicalizer.canonicalize("iw-DE")) == "he-DE"


class TestExtlangForm:
    @pytest.mark.parametrize("tag", ["cmn-Hans-CN", "zh-cmn-Hans-CN", "CMN-hans-cn"])
    def test_to_extlang_form(self, canonicalizer: Canonicalizer, tag: str) -> None:
        assert str(canonicalizer.canonicalize(tag, extlang_form=True)) == "zh-cmn-Hans-CN"

    @pytest.mark.parametrize("tag", ["en-US", "zh-Hans", "nan"])
    def test_languages_without_extlang(self, canonicalizer: Canonicalizer, tag: str) -> None:
        assert str(canonicalizer.canonicalize(tag, extlang_form=True)) == str(canonicalizer.canonicalize(tag))


class TestDomainErrors:
    @pytest.mark.parametrize(
        "tag,category,subtag",
        [
            ("en-invalidvariant", "variant", "invalidvariant"),
            ("xyz", "language", "xyz"),
            ("qaa", "language", "qaa"),
            ("en-Zzzz", "script", "Zzzz"),
            ("en-ZZ", "region", "ZZ"),
            ("en-abc", "extlang", "abc"),
        ],
    )
    def test_unknown_subtag(self, canonicalizer: Canonicalizer, tag: str, category: str, subtag: str) -> None:
        with pytest.raises(DomainError, match=LanguageTagErrorMessages.UNKNOWN_SUBTAG) as exc_info:
            canonicalizer.canonicalize(tag)
        assert exc_info.value.category == category
        assert exc_info.value.subtag.lower() == subtag.lower()

    @pytest.mark.parametrize(
        "tag,subtag",
        [
            ("de-rozaj", "rozaj"),
            ("sli-rozaj", "rozaj"),
            ("sl-biske", "biske"),
            ("sl-biske-rozaj", "biske"),
            ("en-1901", "1901"),
            ("ja-hepburn", "hepburn"),
            ("en-yue", "yue"),
        ],
    )
    def test_prefix_violation(self, canonicalizer: Canonicalizer, tag: str, subtag: str) -> None:
        with pytest.raises(DomainError, match=LanguageTagErrorMessages.NO_VALID_PREFIX) as exc_info:
            canonicalizer.canonicalize(tag)
        assert exc_info.value.subtag == subtag

    def test_prefix_checked_against_canonical_case(self, canonicalizer: Canonicalizer) -> None:
        assert str(canonicalizer.canonicalize("JA-latn-HEPBURN")) == "ja-Latn-hepburn"

    def test_malformed_string(self, canonicalizer: Canonicalizer) -> None:
        with pytest.raises(FormatError):
            canonicalizer.canonicalize("en--US")


class TestGrandfathered:
    @pytest.mark.parametrize(
        "tag,expected",
        [("zh-min-nan", "nan"), ("ZH-MIN-NAN", "nan"), ("en-GB-oed", "en-GB-oxendict"), ("en-gb-OED", "en-GB-oxendict")],
    )
    def test_replacement(self, canonicalizer: Canonicalizer, tag: str, expected: str) -> None:
        canonical = canonicalizer.canonicalize(tag)
        assert str(canonical) == expected
        assert canonical.is_deprecated() is False

    def test_replacement_notice(self, canonicalizer: Canonicalizer, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="langtag")
        canonicalizer.canonicalize("zh-min-nan")
        assert 'exchange grandfathered language tag from "zh-min-nan" to "nan"' in caplog.text

    def test_replacement_must_resolve(self, canonicalizer: Canonicalizer) -> None:
        with pytest.raises(DomainError) as exc_info:
            canonicalizer.canonicalize("i-klingon")
        assert exc_info.value.category == "language"
        assert exc_info.value.subtag == "tlh"

    @pytest.mark.parametrize("tag", ["i-enochian", "I-ENOCHIAN"])
    def test_irregular_without_replacement(self, canonicalizer: Canonicalizer, tag: str) -> None:
        canonical = canonicalizer.canonicalize(tag)
        assert canonical.language == "i-enochian"
        assert str(canonical) == "i-enochian"
        assert canonical.is_deprecated() is True

    def test_parsed_irregular_tag(self, canonicalizer: Canonicalizer) -> None:
        canonical = canonicalizer.canonicalize(parse("i-enochian"))
        assert str(canonical) == "i-enochian"
        assert canonical.is_deprecated() is True

    def test_not_deprecated(self, canonicalizer: Canonicalizer) -> None:
        canonical = canonicalizer.canonicalize("i-default")
        assert str(canonical) == "i-default"
        assert canonical.is_deprecated() is False

    def test_parse_keeps_registry_form(self, canonicalizer: Canonicalizer) -> None:
        assert canonicalizer.parse("EN-gb-oed").language == "en-GB-oed"
        assert canonicalizer.parse("en-GB").region == "GB"


class TestExtensionOrder:
    @pytest.fixture
    def tag(self) -> SubtagSet:
        return SubtagSet.from_fields(
            language="en",
            extensions={"x": ["Private"], "u": ["CA", "gregory"], "a": ["bbb"]},
        )

    def test_appearance_by_default(self, canonicalizer: Canonicalizer, tag: SubtagSet) -> None:
        assert str(canonicalizer.canonicalize(tag)) == "en-u-ca-gregory-a-bbb-x-private"

    def test_sorted(self, iana_registry: IanaRegistry, tag: SubtagSet) -> None:
        canonicalizer = Canonicalizer(iana_registry, extension_order=ExtensionOrder.SORTED)
        assert str(canonicalizer.canonicalize(tag)) == "en-a-bbb-u-ca-gregory-x-private"

    def test_module_level_default(self, iana_registry: IanaRegistry, tag: SubtagSet) -> None:
        assert str(canonicalize(tag, iana_registry)) == "en-u-ca-gregory-a-bbb-x-private"

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("en-U-ca-gregory-A-bbb", "en-u-ca-gregory-a-bbb"),
            ("en-x-Foo-U-ca", "en-x-foo-u-ca"),
            ("en-b-ab-X-cd", "en-b-ab-x-cd"),
        ],
    )
    def test_folds_singletons(self, canonicalizer: Canonicalizer, tag: str, expected: str) -> None:
        assert str(canonicalizer.canonicalize(tag)) == expected

    @pytest.mark.parametrize(
        "order,expected",
        [
            (ExtensionOrder.SORTED, ["0", "a", "t", "u", "x"]),
            (ExtensionOrder.APPEARANCE, ["u", "t", "0", "a", "x"]),
        ],
    )
    def test_order_extensions(self, order: ExtensionOrder, expected: list[str]) -> None:
        extensions = {singleton: ("ab",) for singleton in ["x", "u", "t", "0", "a"]}
        assert list(order_extensions(extensions, order)) == expected


class TestCanonicalizer:
    @pytest.mark.parametrize(
        "tag",
        ["en-Latn-US", "zh-cmn-Hans-CN", "de-BU", "de-DD", "ja-Latn-hepburn-heploc", "zh-min-nan", "i-enochian"],
    )
    def test_idempotent(self, canonicalizer: Canonicalizer, tag: str) -> None:
        once = canonicalizer.canonicalize(tag)
        twice = canonicalizer.canonicalize(once)
        assert twice == once

    def test_input_is_not_modified(self, canonicalizer: Canonicalizer) -> None:
        tag = parse("EN-latn-us")
        canonicalizer.canonicalize(tag)
        assert str(tag) == "EN-latn-us"
        assert tag.deprecated is None

    def test_structured_input(self, canonicalizer: Canonicalizer) -> None:
        tag = SubtagSet.from_fields(language="ZH", extlang="CMN", script="hans", region="cn")
        assert str(canonicalizer.canonicalize(tag)) == "cmn-Hans-CN"

    def test_minimal_registry_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="langtag")
        canonicalizer = Canonicalizer()
        assert isinstance(canonicalizer.registry, MinimalRegistry)

        canonical = canonicalizer.canonicalize("EN-latn-us-x-Foo")
        assert str(canonical) == "en-Latn-US-x-foo"
        assert canonical.is_deprecated() is False
        assert 'blindly accept subtag "Latn" of type "script"' in caplog.text

    def test_minimal_registry_grandfathered(self) -> None:
        canonical = Canonicalizer(MinimalRegistry()).canonicalize("zh-min")
        assert str(canonical) == "zh-min"
        assert canonical.is_deprecated() is True

    def test_suppressed_script_is_not_looked_up(self, iana_registry: IanaRegistry) -> None:
        lookups: list[tuple[str, str]] = []

        class RecordingRegistry:
            def lookup(self, category: Category | str, subtag: str) -> RegistryEntry | None:
                lookups.append((Category(category).value, subtag))
                return iana_registry.lookup(category, subtag)

        Canonicalizer(RecordingRegistry()).canonicalize(parse("sl-Latn-rozaj"))
        assert lookups == [
            ("grandfathered", "sl-Latn-rozaj"),
            ("language", "sl"),
            ("variant", "rozaj"),
        ]


def test_module_level_canonicalize(iana_registry: IanaRegistry) -> None:
    assert str(canonicalize("cmn-Hans-CN", iana_registry, extlang_form=True)) == "zh-cmn-Hans-CN"
    assert str(canonicalize("sl-Latn-rozaj", iana_registry)) == "sl-rozaj"
