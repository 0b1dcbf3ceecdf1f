# tests/test_locations.py

from app.data.locations import city_name, find_city, resolve_city_alias


def test_city_name_maps_id_to_canonical_english_name():
    assert city_name("tbilisi") == "Tbilisi"
    assert city_name("batumi") == "Batumi"


def test_city_name_passes_unknown_id_through():
    assert city_name("Atlantis") == "Atlantis"


def test_find_city_includes_all_district():
    city = find_city("tbilisi")
    assert city is not None
    ids = [d["id"] for d in city["districts"]]
    assert ids[0] == "all"
    assert "vake" in ids


def test_resolve_alias_from_georgian_and_russian_names():
    assert resolve_city_alias("თბილისი") == ["Tbilisi"]
    assert resolve_city_alias("батуми") == ["Batumi"]


def test_resolve_alias_partial_match():
    assert "Kutaisi" in resolve_city_alias("Кутаи")


def test_resolve_alias_no_match_or_blank():
    assert resolve_city_alias("nowhere") == []
    assert resolve_city_alias("   ") == []
