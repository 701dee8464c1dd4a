"""
Offline import of the public CS2 skin catalog (ByMykel CSGO-API).

Skins are upserted by catalog id, and every skin gets one price row per
wear condition its float range can actually roll.
"""
import random
from datetime import datetime

import requests
from sqlalchemy.exc import SQLAlchemyError
from models import db, Skin, SkinConditionPrice
from utils.constants import SKIN_CONDITIONS, SKIN_RARITIES

# Configuration
CATALOG_API_BASE = 'https://bymykel.github.io/CSGO-API/api/en'
CATALOG_SKINS_URL = f"{CATALOG_API_BASE}/skins.json"
REQUEST_TIMEOUT = 30
BATCH_SIZE = 50

RARITY_MAP = {
    'rarity_common': 'consumer',
    'rarity_default': 'consumer',
    'rarity_uncommon_weapon': 'industrial',
    'rarity_uncommon': 'industrial',
    'rarity_rare_weapon': 'milspec',
    'rarity_rare': 'milspec',
    'rarity_mythical_weapon': 'restricted',
    'rarity_mythical': 'restricted',
    'rarity_legendary_weapon': 'classified',
    'rarity_legendary': 'classified',
    'rarity_ancient_weapon': 'covert',
    'rarity_ancient': 'covert',
    'rarity_immortal': 'contraband',
    'rarity_ancient_character': 'extraordinary',
}

# (weapon type, category keywords, weapon name keywords, skin name keywords)
# First match wins; unmatched weapons fall back to rifle.
# Gloves come first since they share the ★ prefix with knives.
WEAPON_TYPE_RULES = [
    ('gloves', ('glove',), ('glove', 'hand wraps'),
     ('gloves', 'hand wraps', 'bloodhound')),
    ('knife', ('knife',),
     ('knife', 'bayonet', 'karambit', 'flip', 'gut', 'huntsman', 'falchion', 'bowie',
      'butterfly', 'shadow', 'paracord', 'survival', 'ursus', 'navaja', 'nomad',
      'stiletto', 'talon', 'skeleton', 'classic', 'kukri'),
     ('★',)),
    ('pistol', ('pistol',),
     ('glock', 'usp', 'p2000', 'p250', 'five-seven', 'tec-9', 'cz75', 'desert eagle',
      'r8 revolver', 'dual berettas'),
     ()),
    ('smg', ('smg', 'submachine'),
     ('mac-10', 'mp9', 'mp7', 'mp5', 'ump', 'p90', 'pp-bizon'),
     ()),
    ('sniper', ('sniper',), ('awp', 'ssg 08', 'scout', 'g3sg1', 'scar-20'), ()),
    ('shotgun', ('shotgun',), ('nova', 'xm1014', 'sawed-off', 'mag-7'), ()),
    ('heavy', ('machinegun', 'heavy'), ('negev', 'm249'), ()),
    ('rifle', ('rifle',), ('ak-47', 'm4a4', 'm4a1', 'famas', 'galil', 'aug', 'sg 553'), ()),
]

# USD ranges per rarity, 2024-2025 market
BASE_PRICE_RANGES = {
    'consumer': (0.03, 2),
    'industrial': (0.05, 5),
    'milspec': (0.15, 20),
    'restricted': (0.80, 60),
    'classified': (5, 300),
    'covert': (25, 1500),
    'contraband': (2000, 8000),
    'extraordinary': (60, 2500),
}

WEAPON_PRICE_MULTIPLIERS = {
    'knife': 20,
    'gloves': 10,
    'sniper': 1.8,
    'rifle': 1.4,
    'pistol': 0.9,
    'smg': 0.8,
    'shotgun': 0.7,
    'heavy': 0.6,
}

MINIMUM_PRICES = {'knife': 60, 'gloves': 80}
STATTRAK_MULTIPLIER = 1.25
SOUVENIR_MULTIPLIER = 0.8

CONDITION_PRICE_MULTIPLIERS = {'fn': 1.0, 'mw': 0.87, 'ft': 0.72, 'ww': 0.58, 'bs': 0.42}


def _name_of(value):
    """Catalog fields are either {'id', 'name'} objects or plain strings"""
    if isinstance(value, dict):
        return value.get('name') or ''
    return value or ''

def _id_of(value):
    if isinstance(value, dict):
        value = value.get('id')
    return str(value) if value is not None else None

def map_rarity(rarity):
    """Map a catalog rarity to (rarity, rarity_name, rarity_color)"""
    if not rarity:
        return 'consumer', SKIN_RARITIES['consumer']['name'], SKIN_RARITIES['consumer']['color']

    rarity_id = rarity.get('id') if isinstance(rarity, dict) else rarity
    mapped = RARITY_MAP.get(rarity_id)
    if mapped:
        return mapped, SKIN_RARITIES[mapped]['name'], SKIN_RARITIES[mapped]['color']

    rarity_name = rarity.get('name') if isinstance(rarity, dict) else None
    rarity_color = rarity.get('color') if isinstance(rarity, dict) else None
    return ('consumer',
            rarity_name or SKIN_RARITIES['consumer']['name'],
            rarity_color or SKIN_RARITIES['consumer']['color'])

def map_weapon_type(category, weapon, skin_name=''):
    """Classify a skin into one of the storefront weapon types"""
    category_name = _name_of(category).lower()
    weapon_name = _name_of(weapon).lower()
    full_name = (skin_name or '').lower()

    for weapon_type, category_keys, weapon_keys, name_keys in WEAPON_TYPE_RULES:
        if (any(key in category_name for key in category_keys) or
                any(key in weapon_name for key in weapon_keys) or
                any(key in full_name for key in name_keys)):
            return weapon_type

    return 'rifle'

def generate_price(rarity, weapon_type, stattrak=False, souvenir=False, rng=random):
    """Generate a plausible base price for a skin"""
    low, high = BASE_PRICE_RANGES.get(rarity, BASE_PRICE_RANGES['consumer'])
    price = rng.uniform(low, high) * WEAPON_PRICE_MULTIPLIERS.get(weapon_type, 1)

    if weapon_type in MINIMUM_PRICES:
        price = max(price, MINIMUM_PRICES[weapon_type])
    if stattrak:
        price *= STATTRAK_MULTIPLIER
    if souvenir:
        price *= SOUVENIR_MULTIPLIER

    return round(price, 2)

def build_skin_fields(entry):
    """Translate one catalog entry into Skin column values"""
    rarity, rarity_name, rarity_color = map_rarity(entry.get('rarity'))
    name = entry.get('name') or ''

    return {
        'id': str(entry['id']),
        'name': name,
        'description': entry.get('description'),
        'weapon_type': map_weapon_type(entry.get('category'), entry.get('weapon'), name),
        'weapon_id': _id_of(entry.get('weapon')),
        'weapon_name': _name_of(entry.get('weapon')) or None,
        'category': _name_of(entry.get('category')) or None,
        'rarity': rarity,
        'rarity_name': rarity_name,
        'rarity_color': rarity_color,
        'pattern_id': _id_of(entry.get('pattern')),
        'pattern_name': _name_of(entry.get('pattern')) or None,
        'min_float': entry.get('min_float') or 0.0,
        'max_float': entry.get('max_float') or 1.0,
        'stattrak': bool(entry.get('stattrak')) or 'stattrak' in name.lower(),
        'souvenir': bool(entry.get('souvenir')) or 'souvenir' in name.lower(),
        'paint_index': _id_of(entry.get('paint_index')),
        'market_hash_name': entry.get('market_hash_name'),
        'image_url': entry.get('image'),
        'type': 'skin',
    }

def build_condition_prices(skin_fields, rng=random):
    """Price rows for every condition overlapping the skin's float range"""
    skin_min = skin_fields['min_float']
    skin_max = skin_fields['max_float']
    prices = []

    for condition, info in SKIN_CONDITIONS.items():
        condition_min, condition_max = (float(bound) for bound in info['float_range'].split('-'))
        if skin_min > condition_max or skin_max < condition_min:
            continue

        base_price = generate_price(skin_fields['rarity'], skin_fields['weapon_type'],
                                    skin_fields['stattrak'], skin_fields['souvenir'], rng=rng)
        current_price = round(base_price * CONDITION_PRICE_MULTIPLIERS[condition], 2)

        prices.append({
            'skin_id': skin_fields['id'],
            'condition': condition,
            'condition_name': info['name'],
            'float_range': info['float_range'],
            'base_price': base_price,
            'current_price': max(current_price, 0.01),
            'price_change_24h': round(rng.uniform(-5, 5), 2),
        })

    return prices

def fetch_catalog(url=CATALOG_SKINS_URL):
    """Download the skins catalog JSON"""
    print(f"[Import] Fetching {url}")
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()

def _upsert_batch(batch, rng):
    skin_rows = [build_skin_fields(entry) for entry in batch]
    for fields in skin_rows:
        db.session.merge(Skin(**fields))
    db.session.flush()

    skin_ids = [fields['id'] for fields in skin_rows]
    existing = {
        (price.skin_id, price.condition): price
        for price in SkinConditionPrice.query.filter(SkinConditionPrice.skin_id.in_(skin_ids))
    }

    price_count = 0
    now = datetime.utcnow()
    for fields in skin_rows:
        for price_fields in build_condition_prices(fields, rng=rng):
            row = existing.get((price_fields['skin_id'], price_fields['condition']))
            if row is None:
                row = SkinConditionPrice(**price_fields)
                db.session.add(row)
            else:
                for key, value in price_fields.items():
                    setattr(row, key, value)
            row.last_updated = now
            price_count += 1

    db.session.commit()
    return len(skin_rows), price_count

def import_skins(entries=None, batch_size=BATCH_SIZE, rng=None):
    """
    Import weapon skins and their condition prices.

    Args:
        entries: Catalog entries; fetched from the public API when omitted
        batch_size: Skins committed per transaction
        rng: Random source for generated prices

    Returns:
        dict: counts of imported skins, price rows and failed batches
    """
    if entries is None:
        entries = fetch_catalog()
    entries = [entry for entry in entries if entry.get('id')]
    rng = rng or random.Random()

    print(f"[Import] Found {len(entries)} skins to import")

    imported = 0
    prices = 0
    errors = 0

    for start in range(0, len(entries), batch_size):
        batch = entries[start:start + batch_size]
        try:
            skin_count, price_count = _upsert_batch(batch, rng)
        except SQLAlchemyError as e:
            db.session.rollback()
            errors += 1
            print(f"[Import] Error importing batch {start}-{start + len(batch)}: {e}")
            continue

        imported += skin_count
        prices += price_count
        print(f"[Import] Imported {imported}/{len(entries)} skins ({errors} errors)")

    print(f"[Import] Done: {imported} skins, {prices} condition prices, {errors} failed batches")
    return {'imported': imported, 'prices': prices, 'errors': errors}
