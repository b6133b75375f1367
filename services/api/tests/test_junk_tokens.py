"""Tests for novel token extraction from junk-reported titles."""

import pytest

from dealscan.services.junk_tokens import (
    MIN_TOKEN_LENGTH,
    STOP_WORDS,
    extract_novel_tokens,
    is_numeric_token,
)

from tests.conftest import InMemoryCatalogStore


class TestIsNumericToken:
    def test_numeric_patterns(self):
        assert is_numeric_token("123")
        assert is_numeric_token("006/197")
        assert is_numeric_token("45.67")
        assert is_numeric_token("10-20")

    def test_not_numeric(self):
        assert not is_numeric_token("sv3")
        assert not is_numeric_token("1/2/3")
        assert not is_numeric_token("x50")
        assert not is_numeric_token("12a")


@pytest.mark.asyncio
async def test_clean_title_with_known_card_learns_nothing(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("charizard ex 006/197 obsidian flames", "sv3-125", catalog=catalog)
    assert tokens == []


@pytest.mark.asyncio
async def test_extracts_novel_junk_words(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens(
        "bootleg charizard ex obsidian flames reproduction", "sv3-125", catalog=catalog
    )
    assert tokens == ["bootleg", "reproduction"]


@pytest.mark.asyncio
async def test_proxy_fake_reprint_scenario(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("Charizard Proxy Fake Reprint", "base1-4", catalog=catalog)
    assert tokens == ["proxy", "fake", "reprint"]


@pytest.mark.asyncio
async def test_filters_stop_words(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("pokemon card tcg holo rare nm free postage", None, catalog=catalog)
    assert tokens == []


@pytest.mark.asyncio
async def test_filters_short_tokens(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("ab cd ef bootleg", None, catalog=catalog)
    assert tokens == ["bootleg"]


@pytest.mark.asyncio
async def test_filters_numeric_tokens(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("006/197 123 45.67 10-20 bootleg", None, catalog=catalog)
    assert tokens == ["bootleg"]


@pytest.mark.asyncio
async def test_excludes_words_of_other_catalog_cards(catalog: InMemoryCatalogStore):
    # Reported as the wrong Charizard, but "pikachu" is still a real card name.
    tokens = await extract_novel_tokens("fake pikachu charizard", "sv3-125", catalog=catalog)
    assert tokens == ["fake"]


@pytest.mark.asyncio
async def test_name_lookup_excludes_whole_words_only(catalog: InMemoryCatalogStore):
    # "char" is a substring of "charizard" but not itself a catalog word.
    tokens = await extract_novel_tokens("char fake", None, catalog=catalog)
    assert tokens == ["char", "fake"]


@pytest.mark.asyncio
async def test_keeps_first_seen_order_and_duplicates(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("fake proxy fake", None, catalog=catalog)
    assert tokens == ["fake", "proxy", "fake"]


@pytest.mark.asyncio
async def test_is_stable_for_same_catalog_state(catalog: InMemoryCatalogStore):
    title = "custom orica charizard ex obsidian flames 125/197"
    first = await extract_novel_tokens(title, "sv3-125", catalog=catalog)
    second = await extract_novel_tokens(title, "sv3-125", catalog=catalog)
    assert first == second == ["custom", "orica"]


@pytest.mark.asyncio
async def test_name_lookup_gets_unique_candidates_and_limit(catalog: InMemoryCatalogStore):
    await extract_novel_tokens("fake fake proxy", None, catalog=catalog, lookup_limit=25)
    assert catalog.name_lookups == [(["fake", "proxy"], 25)]


@pytest.mark.asyncio
async def test_no_catalog_lookup_when_nothing_survives_stop_words(catalog: InMemoryCatalogStore):
    tokens = await extract_novel_tokens("pokemon card tcg trading game", "sv3-125", catalog=catalog)
    assert tokens == []
    assert catalog.name_lookups == []


@pytest.mark.asyncio
async def test_catalog_failure_proceeds_without_exclusions(catalog: InMemoryCatalogStore):
    catalog.fail_card_lookup = True
    catalog.fail_name_lookup = True

    tokens = await extract_novel_tokens("charizard bootleg", "sv3-125", catalog=catalog)
    assert tokens == ["charizard", "bootleg"]


@pytest.mark.asyncio
async def test_card_lookup_failure_still_uses_name_lookup(catalog: InMemoryCatalogStore):
    catalog.fail_card_lookup = True

    tokens = await extract_novel_tokens("charizard bootleg", "sv3-125", catalog=catalog)
    assert tokens == ["bootleg"]


@pytest.mark.asyncio
async def test_never_emits_filtered_tokens(catalog: InMemoryCatalogStore):
    title = "PSA 10 Charizard ex OBF 125/197 Obsidian Flames misprint lot x2 uk seller"
    tokens = await extract_novel_tokens(title, "sv3-125", catalog=catalog)

    assert tokens == ["misprint", "lot", "seller"]
    for t in tokens:
        assert len(t) >= MIN_TOKEN_LENGTH
        assert t not in STOP_WORDS
        assert not is_numeric_token(t)
        assert t not in {"charizard", "obsidian", "flames", "obf"}
