import random

import pytest

from models import db, Skin, SkinConditionPrice
from services.catalog_import import (map_rarity, map_weapon_type, build_condition_prices,
                                     build_skin_fields, generate_price, import_skins)
import import_catalog

CATALOG = [
    {
        'id': 'skin-e0a0b6f0',
        'name': 'AK-47 | Redline',
        'description': 'It has been painted using a carbon fiber hydrographic.',
        'weapon': {'id': 'weapon_ak47', 'name': 'AK-47'},
        'category': {'id': 'csgo_inventory_weapon_category_rifles', 'name': 'Rifles'},
        'pattern': {'id': 'cu_ak47_cobra', 'name': 'Redline'},
        'min_float': 0.10,
        'max_float': 0.70,
        'rarity': {'id': 'rarity_legendary_weapon', 'name': 'Classified', 'color': '#d32ce6'},
        'stattrak': True,
        'souvenir': False,
        'paint_index': '282',
        'image': 'https://example.com/redline.png',
    },
    {
        'id': 'skin-7c2b1d11',
        'name': '★ Karambit | Fade',
        'weapon': {'id': 'weapon_knife_karambit', 'name': 'Karambit'},
        'category': {'id': 'sfui_invpanel_filter_melee', 'name': 'Knives'},
        'min_float': 0.0,
        'max_float': 0.08,
        'rarity': {'id': 'rarity_ancient_weapon', 'name': 'Covert', 'color': '#eb4b4b'},
    },
    {'name': 'Entry without an id'},
]


class FakeResponse:
    def __init__(self, payload):
        self.payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self.payload


def test_map_rarity():
    assert map_rarity({'id': 'rarity_ancient_weapon'}) == ('covert', 'Covert', '#EB4B4B')
    assert map_rarity('rarity_immortal')[0] == 'contraband'
    assert map_rarity(None) == ('consumer', 'Consumer Grade', '#B0C3D9')
    assert map_rarity({'id': 'rarity_new', 'name': 'Remarkable', 'color': '#123456'}) == \
        ('consumer', 'Remarkable', '#123456')


@pytest.mark.parametrize('category, weapon, name, expected', [
    ({'name': 'Pistols'}, {'name': 'Glock-18'}, 'Glock-18 | Fade', 'pistol'),
    ({'name': 'Sniper Rifles'}, {'name': 'AWP'}, 'AWP | Asiimov', 'sniper'),
    ({'name': 'Knives'}, {'name': 'Karambit'}, '★ Karambit | Fade', 'knife'),
    ({'name': 'Gloves'}, {'name': 'Sport Gloves'}, '★ Sport Gloves | Vice', 'gloves'),
    (None, {'name': 'Sport Gloves'}, 'Sport Gloves | Vice', 'gloves'),
    ({'name': 'SMGs'}, {'name': 'MP9'}, 'MP9 | Hydra', 'smg'),
    ({'name': 'Heavy'}, {'name': 'Nova'}, 'Nova | Koi', 'shotgun'),
    ({'name': 'Machineguns'}, {'name': 'Negev'}, 'Negev | Power Loader', 'heavy'),
    (None, None, 'Mystery Item', 'rifle'),
])
def test_map_weapon_type(category, weapon, name, expected):
    assert map_weapon_type(category, weapon, name) == expected


def test_generate_price_respects_floors_and_ranges():
    rng = random.Random(1)
    for _ in range(20):
        assert 0.03 * 0.9 <= generate_price('consumer', 'pistol', rng=rng) <= 2 * 0.9
        assert generate_price('consumer', 'knife', rng=rng) >= 60


def test_condition_prices_follow_float_range():
    fields = build_skin_fields(CATALOG[0])
    assert fields['rarity'] == 'classified'
    assert fields['weapon_type'] == 'rifle'
    assert fields['pattern_name'] == 'Redline'

    prices = build_condition_prices(fields, rng=random.Random(3))
    assert [price['condition'] for price in prices] == ['mw', 'ft', 'ww', 'bs']
    for price in prices:
        assert 0 < price['current_price'] <= price['base_price']


def test_import_skins(app):
    summary = import_skins(CATALOG, batch_size=1, rng=random.Random(5))

    assert summary == {'imported': 2, 'prices': 6, 'errors': 0}
    karambit = db.session.get(Skin, 'skin-7c2b1d11')
    assert karambit.weapon_type == 'knife'
    assert karambit.rarity == 'covert'
    assert sorted(price.condition for price in karambit.condition_prices) == ['fn', 'mw']


def test_import_is_safe_to_rerun(app):
    import_skins(CATALOG, rng=random.Random(5))
    import_skins(CATALOG, rng=random.Random(6))

    assert Skin.query.count() == 2
    assert SkinConditionPrice.query.count() == 6


def test_imported_skins_are_searchable(client):
    import_skins(CATALOG, rng=random.Random(5))

    data = client.get('/api/skins?weapon_types=knife').get_json()
    assert [skin['name'] for skin in data['data']] == ['★ Karambit | Fade']


def test_import_fetches_catalog_when_no_entries(app, monkeypatch):
    requested = []

    def fake_get(url, timeout=None):
        requested.append(url)
        return FakeResponse(CATALOG)

    monkeypatch.setattr('services.catalog_import.requests.get', fake_get)
    summary = import_skins(rng=random.Random(5))

    assert requested == ['https://bymykel.github.io/CSGO-API/api/en/skins.json']
    assert summary['imported'] == 2


def test_import_catalog_command(app, monkeypatch):
    monkeypatch.setattr('app.app', app)
    monkeypatch.setattr('services.catalog_import.requests.get', lambda url, timeout=None: FakeResponse(CATALOG))

    assert import_catalog.main(['--batch-size', '10']) == 0
    assert Skin.query.count() == 2
