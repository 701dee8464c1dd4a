"""
Catalog search for the browse page.

All filters, including condition and price filters that live on the
skin_condition_prices child table, are applied in one SQL query so the
reported total always matches the pages served.
"""
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from models import db, Skin, SkinConditionPrice
from utils.constants import SKINS_PER_PAGE

SORT_OPTIONS = ('name_asc', 'name_desc', 'newest', 'price_asc', 'price_desc')
DEFAULT_SORT = 'name_asc'


def _price_bounds_subquery():
    """Cheapest and dearest positive current price per skin"""
    return (
        db.session.query(
            SkinConditionPrice.skin_id.label('skin_id'),
            func.min(SkinConditionPrice.current_price).label('min_price'),
            func.max(SkinConditionPrice.current_price).label('max_price'),
        )
        .filter(SkinConditionPrice.current_price > 0)
        .group_by(SkinConditionPrice.skin_id)
        .subquery()
    )


def _sort_clauses(sort_by, bounds):
    cheapest = func.coalesce(bounds.c.min_price, 0)
    if sort_by == 'name_desc':
        return [Skin.name.desc()]
    if sort_by == 'newest':
        return [Skin.created_at.desc(), Skin.name.asc()]
    if sort_by == 'price_asc':
        return [cheapest.asc(), Skin.name.asc()]
    if sort_by == 'price_desc':
        return [cheapest.desc(), Skin.name.asc()]
    return [Skin.name.asc()]


def search_skins(search='', weapon_types=None, rarities=None, conditions=None,
                 price_min=None, price_max=None, sort_by=DEFAULT_SORT,
                 page=1, limit=SKINS_PER_PAGE):
    """
    Filter, sort and paginate weapon skins.

    Price bounds are inclusive and compare against the skin's positive
    condition prices: a skin matches when its dearest price is at least
    price_min and its cheapest price is at most price_max. Skins without
    any positive price never match a price bound.

    Returns:
        tuple: (list of Skin for the requested page, total matching count)
    """
    bounds = _price_bounds_subquery()

    query = (
        Skin.query
        .outerjoin(bounds, bounds.c.skin_id == Skin.id)
        .filter(Skin.type == 'skin')
    )

    if search:
        query = query.filter(func.lower(Skin.name).contains(search.lower(), autoescape=True))

    if weapon_types:
        query = query.filter(Skin.weapon_type.in_(weapon_types))

    if rarities:
        query = query.filter(Skin.rarity.in_(rarities))

    if conditions:
        query = query.filter(Skin.condition_prices.any(SkinConditionPrice.condition.in_(conditions)))

    if price_min is not None:
        query = query.filter(bounds.c.max_price >= price_min)

    if price_max is not None:
        query = query.filter(bounds.c.min_price <= price_max)

    if sort_by not in SORT_OPTIONS:
        sort_by = DEFAULT_SORT

    total = query.count()

    skins = (
        query
        .options(selectinload(Skin.condition_prices))
        .order_by(*_sort_clauses(sort_by, bounds))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return skins, total
