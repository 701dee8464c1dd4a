from datetime import datetime
from .database import db, isoformat


TICKET_TYPES = ('buy', 'sell')
TICKET_STATUSES = ('pending', 'quote_sent', 'processing', 'completed', 'cancelled')

class Ticket(db.Model):
    """Database model for customer buy/sell requests."""
    __tablename__ = 'tickets'

    id = db.Column(db.String(40), primary_key=True)  # LILO-<epoch ms>-<suffix>
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    # Request details
    type = db.Column(db.String(4), nullable=False)  # buy, sell
    skin_name = db.Column(db.String(255), nullable=False)
    condition = db.Column(db.String(2), nullable=False)  # fn, mw, ft, ww, bs
    condition_name = db.Column(db.String(20), nullable=False)
    price = db.Column(db.Float)
    quoted_price = db.Column(db.Float)

    # Status tracking
    status = db.Column(db.String(20), default='pending', index=True)  # pending, quote_sent, processing, completed, cancelled

    notes = db.Column(db.Text)
    admin_notes = db.Column(db.Text)
    steam_trade_url = db.Column(db.String(255))
    payment_method = db.Column(db.String(50))

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'type': self.type,
            'skin_name': self.skin_name,
            'condition': self.condition,
            'condition_name': self.condition_name,
            'price': self.price,
            'quoted_price': self.quoted_price,
            'status': self.status,
            'notes': self.notes,
            'admin_notes': self.admin_notes,
            'steam_trade_url': self.steam_trade_url,
            'payment_method': self.payment_method,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'users': self.user.to_summary() if self.user else None,
        }
