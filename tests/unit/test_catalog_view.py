from boutique.catalog.models import Gender, SortKey
from boutique.catalog.view import build_catalog_view, collation_key
from tests.fakes import make_product


def _catalog():
    return [
        make_product("P-ZEN", "zénith", 30.0, "Homme"),
        make_product("P-ABS", "Absolu", 80.0, "Femme"),
        make_product("P-ECL", "Éclat", None, "Femme"),
        make_product("P-BOI", "Bois Rare", 45.5, "Unisexe"),
    ]


def _skus(rows):
    return [p.sku for p in rows]


def test_default_view_is_sorted_by_name():
    rows = build_catalog_view(_catalog())
    names = [p.name for p in rows]
    assert names == sorted(names)


def test_query_matches_name_substring_case_insensitive():
    rows = build_catalog_view(_catalog(), q="  BOIS ")
    assert _skus(rows) == ["P-BOI"]


def test_query_matches_exact_sku_only():
    assert _skus(build_catalog_view(_catalog(), q="p-abs")) == ["P-ABS"]
    # sous-chaîne de SKU: pas de correspondance
    assert build_catalog_view(_catalog(), q="p-a") == []


def test_gender_filter_exact_and_sentinel():
    femmes = build_catalog_view(_catalog(), gender="Femme")
    assert {p.sku for p in femmes} == {"P-ABS", "P-ECL"}
    assert len(build_catalog_view(_catalog(), gender="Tous")) == 4
    assert len(build_catalog_view(_catalog(), gender="")) == 4


def test_unknown_gender_value_yields_empty_result():
    assert build_catalog_view(_catalog(), gender="Enfant") == []


def test_price_sorts_are_numeric_and_missing_price_counts_as_zero():
    asc = build_catalog_view(_catalog(), sort="price-asc")
    assert _skus(asc) == ["P-ECL", "P-ZEN", "P-BOI", "P-ABS"]
    desc = build_catalog_view(_catalog(), sort="price-desc")
    assert _skus(desc) == ["P-ABS", "P-BOI", "P-ZEN", "P-ECL"]


def test_name_desc_uses_accent_insensitive_ordering():
    rows = build_catalog_view(_catalog(), sort=SortKey.NAME_DESC.value)
    assert [p.name for p in rows] == ["zénith", "Éclat", "Bois Rare", "Absolu"]


def test_unknown_sort_keeps_name_order():
    assert _skus(build_catalog_view(_catalog(), sort="popularity")) == _skus(build_catalog_view(_catalog()))


def test_filters_combine_and_output_is_subset():
    source = _catalog()
    rows = build_catalog_view(source, q="é", gender="Femme", sort="price-desc")
    assert _skus(rows) == ["P-ECL"]
    assert all(p in source for p in rows)


def test_collation_key_strips_accents_and_case():
    assert collation_key("Éclat") == collation_key("eclat")
    assert collation_key("") == ""


def test_gender_parse_falls_back_to_unisexe():
    assert Gender.parse("Homme") is Gender.HOMME
    assert Gender.parse(Gender.FEMME) is Gender.FEMME
    assert Gender.parse("enfant") is Gender.UNISEXE
    assert Gender.parse(None) is Gender.UNISEXE
    assert make_product("X", "x", 1.0, gender="???").gender is Gender.UNISEXE
