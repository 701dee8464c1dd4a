from datetime import datetime
from .database import db, isoformat

class User(db.Model):
    """Database model for storefront customers signed in through OAuth."""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255))
    avatar_url = db.Column(db.String(500))

    # Profile fields editable by the user
    trade_link = db.Column(db.String(255))
    phone_number = db.Column(db.String(32))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    tickets = db.relationship('Ticket', backref='user', lazy=True)

    def to_summary(self):
        """Short form embedded in ticket payloads"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'avatar_url': self.avatar_url,
        }

    def to_dict(self):
        data = self.to_summary()
        data.update({
            'trade_link': self.trade_link,
            'phone_number': self.phone_number,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        })
        return data