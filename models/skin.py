from datetime import datetime
from .database import db, isoformat

class Skin(db.Model):
    """Catalog entry for a CS2 weapon skin."""
    __tablename__ = 'skins'

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text)

    # Weapon details
    weapon_type = db.Column(db.String(20), index=True)  # pistol, rifle, smg, shotgun, sniper, heavy, knife, gloves
    weapon_id = db.Column(db.String(64))
    weapon_name = db.Column(db.String(100))
    category = db.Column(db.String(100))

    # Rarity tier
    rarity = db.Column(db.String(20), index=True)
    rarity_name = db.Column(db.String(50))
    rarity_color = db.Column(db.String(10))

    pattern_id = db.Column(db.String(64))
    pattern_name = db.Column(db.String(255))
    min_float = db.Column(db.Float, default=0.0)
    max_float = db.Column(db.Float, default=1.0)
    stattrak = db.Column(db.Boolean, default=False)
    souvenir = db.Column(db.Boolean, default=False)
    paint_index = db.Column(db.String(20))
    market_hash_name = db.Column(db.String(255))
    image_url = db.Column(db.String(500))
    type = db.Column(db.String(20), default='skin', index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    condition_prices = db.relationship('SkinConditionPrice', backref='skin', lazy=True,
                                       cascade='all, delete-orphan',
                                       order_by='SkinConditionPrice.id')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'weapon_type': self.weapon_type,
            'weapon_name': self.weapon_name,
            'category': self.category,
            'rarity': self.rarity,
            'rarity_name': self.rarity_name,
            'rarity_color': self.rarity_color,
            'pattern_name': self.pattern_name,
            'min_float': self.min_float,
            'max_float': self.max_float,
            'stattrak': self.stattrak,
            'souvenir': self.souvenir,
            'market_hash_name': self.market_hash_name,
            'image_url': self.image_url,
            'type': self.type,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'skin_condition_prices': [price.to_dict() for price in self.condition_prices],
        }


class SkinConditionPrice(db.Model):
    """Price of a skin in one wear condition."""
    __tablename__ = 'skin_condition_prices'
    __table_args__ = (
        db.UniqueConstraint('skin_id', 'condition', name='uq_skin_condition'),
    )

    id = db.Column(db.Integer, primary_key=True)
    skin_id = db.Column(db.String(64), db.ForeignKey('skins.id'), nullable=False, index=True)
    condition = db.Column(db.String(2), nullable=False)  # fn, mw, ft, ww, bs
    condition_name = db.Column(db.String(20), nullable=False)
    float_range = db.Column(db.String(20))

    # Prices in USD
    base_price = db.Column(db.Float, nullable=False, default=0.0)
    current_price = db.Column(db.Float, nullable=False, default=0.0)
    steam_price = db.Column(db.Float)
    price_change_24h = db.Column(db.Float, default=0.0)

    last_updated = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'skin_id': self.skin_id,
            'condition': self.condition,
            'condition_name': self.condition_name,
            'float_range': self.float_range,
            'base_price': self.base_price,
            'current_price': self.current_price,
            'steam_price': self.steam_price,
            'price_change_24h': self.price_change_24h,
            'last_updated': isoformat(self.last_updated),
        }
