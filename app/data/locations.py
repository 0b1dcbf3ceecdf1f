# app/data/locations.py
"""
都市・地区マスタ。
検索語が ka / ru の都市名だった場合に、DB 上の正規名（英語名）へ寄せるのにも使う。
"""
from typing import Optional

ALL_DISTRICT = {"id": "all", "name": {"en": "All", "ka": "ყველა", "ru": "Все"}}


def _city(city_id: str, en: str, ka: str, ru: str, districts: list[dict] | None = None) -> dict:
    return {
        "id": city_id,
        "name": {"en": en, "ka": ka, "ru": ru},
        "districts": [ALL_DISTRICT] + (districts or []),
    }


def _district(district_id: str, en: str, ka: str, ru: str) -> dict:
    return {"id": district_id, "name": {"en": en, "ka": ka, "ru": ru}}


TBILISI_DISTRICTS = [
    _district("avlabari", "Avlabari", "ავლაბარი", "Авлабари"),
    _district("didi-dighomi", "Didi Dighomi", "დიდი დიღომი", "Диди Дигоми"),
    _district("didube", "Didube", "დიდუბე", "Дидубе"),
    _district("dighomi", "Dighomi", "დიღომი", "Дигоми"),
    _district("gldani", "Gldani", "გლდანი", "Глдани"),
    _district("grmagele", "Grmagele", "გრმაგელე", "Грмагеле"),
    _district("isani", "Isani", "ისანი", "Исани"),
    _district("marjanishvili", "Marjanishvili", "მარჯანიშვილი", "Марджанишвили"),
    _district("nadzaladevi", "Nadzaladevi", "ნაძალადევი", "Надзаладеви"),
    _district("ortachala", "Ortachala", "ორთაჭალა", "Ортачала"),
    _district("other", "Other", "სხვა", "Другое"),
    _district("rustaveli", "Rustaveli", "რუსთაველი", "Руставели"),
    _district("saburtalo", "Saburtalo", "საბურთალო", "Сабуртало"),
    _district("temka", "Temka", "თემქა", "Темка"),
    _district("tsereteli", "Tsereteli", "წერეთელი", "Церетели"),
    _district("vake", "Vake", "ვაკე", "Ваке"),
    _district("varketili", "Varketili", "ვარკეთილი", "Варкетили"),
]

LOCATIONS: list[dict] = [
    _city("batumi", "Batumi", "ბათუმი", "Батуми"),
    _city("kutaisi", "Kutaisi", "ქუთაისი", "Кутаиси"),
    _city("rustavi", "Rustavi", "რუსთავი", "Рустави"),
    _city("gori", "Gori", "გორი", "Гори"),
    _city("zugdidi", "Zugdidi", "ზუგდიდი", "Зугдиди"),
    _city("tbilisi", "Tbilisi", "თბილისი", "Тбилиси", TBILISI_DISTRICTS),
    _city("telavi", "Telavi", "თელავი", "Телави"),
    _city("kobuleti", "Kobuleti", "ქობულეთი", "Кобулети"),
    _city("borjomi", "Borjomi", "ბორჯომი", "Боржоми"),
    _city("zestaponi", "Zestaponi", "ზესტაფონი", "Зестафони"),
]


def find_city(city_id: str) -> Optional[dict]:
    for city in LOCATIONS:
        if city["id"] == city_id:
            return city
    return None


def city_name(city_id: str) -> str:
    """都市 ID → 正規名（英語）。未知の ID はそのまま返す。"""
    city = find_city(city_id)
    return city["name"]["en"] if city else city_id


def resolve_city_alias(term: str) -> list[str]:
    """
    検索語にマッチするローカライズ名（en/ka/ru）を持つ都市の正規名一覧。
    大文字小文字は無視し、完全一致または部分一致で判定する。
    """
    needle = term.strip().casefold()
    if not needle:
        return []

    matched = []
    for city in LOCATIONS:
        names = [n.casefold() for n in city["name"].values()]
        if any(needle == n or needle in n for n in names):
            matched.append(city["name"]["en"])
    return matched
