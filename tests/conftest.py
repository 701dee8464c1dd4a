import uuid
from datetime import datetime, timedelta

import pytest

from app import create_app
from models import db, User, Skin, SkinConditionPrice, Ticket

ADMIN_EMAIL = 'admin@lilo.test'


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'test-secret',
        'ADMIN_EMAILS': ADMIN_EMAIL,
        'BASE_URL': 'http://lilo.test',
        'MAIL_SERVER': None,
        'GOOGLE_CLIENT_ID': '',
        'GOOGLE_CLIENT_SECRET': '',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, name=None):
    user = User(id=str(uuid.uuid4()), email=email, name=name or email.split('@')[0],
                avatar_url='https://example.com/avatar.png')
    db.session.add(user)
    db.session.commit()
    return user


def login(client, email):
    with client.session_transaction() as session:
        session['user_email'] = email


@pytest.fixture
def user(app):
    return make_user('player@lilo.test', 'Player One')


@pytest.fixture
def other_user(app):
    return make_user('rival@lilo.test', 'Rival')


@pytest.fixture
def user_client(client, user):
    login(client, user.email)
    return client


@pytest.fixture
def admin_client(client):
    login(client, ADMIN_EMAIL)
    return client


def make_ticket(user, status='pending', ticket_type='sell', skin_name='AWP | Asiimov',
                condition='ft', created_at=None, ticket_id=None):
    created_at = created_at or datetime.utcnow()
    ticket = Ticket(
        id=ticket_id or f"LILO-{uuid.uuid4().hex[:10].upper()}",
        user_id=user.id,
        type=ticket_type,
        skin_name=skin_name,
        condition=condition,
        condition_name={'fn': 'Factory New', 'mw': 'Minimal Wear', 'ft': 'Field-Tested',
                        'ww': 'Well-Worn', 'bs': 'Battle-Scarred'}[condition],
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )
    db.session.add(ticket)
    db.session.commit()
    return ticket


def make_skin(skin_id, name, weapon_type='rifle', rarity='covert', prices=None,
              created_at=None, item_type='skin'):
    """prices maps condition code to current price"""
    skin = Skin(id=skin_id, name=name, weapon_type=weapon_type, rarity=rarity,
                rarity_name=rarity.title(), type=item_type,
                created_at=created_at or datetime.utcnow())
    db.session.add(skin)
    for condition, price in (prices or {}).items():
        db.session.add(SkinConditionPrice(
            skin_id=skin_id,
            condition=condition,
            condition_name=condition.upper(),
            base_price=price,
            current_price=price,
        ))
    db.session.commit()
    return skin


@pytest.fixture
def catalog(app):
    """A small catalog covering every filter dimension"""
    base = datetime(2025, 1, 1)
    return [
        make_skin('skin-ak-redline', 'AK-47 | Redline', 'rifle', 'classified',
                  {'ft': 12.5, 'mw': 20.0}, created_at=base),
        make_skin('skin-awp-asiimov', 'AWP | Asiimov', 'sniper', 'covert',
                  {'ft': 95.0, 'bs': 60.0}, created_at=base + timedelta(days=1)),
        make_skin('skin-glock-fade', 'Glock-18 | Fade', 'pistol', 'restricted',
                  {'fn': 1500.0}, created_at=base + timedelta(days=2)),
        make_skin('skin-p250-sand', 'P250 | Sand Dune', 'pistol', 'consumer',
                  {'fn': 0.05, 'bs': 0.03}, created_at=base + timedelta(days=3)),
        make_skin('skin-m4-unpriced', 'M4A4 | Unpriced', 'rifle', 'milspec',
                  {'ft': 0.0}, created_at=base + timedelta(days=4)),
        make_skin('sticker-1', 'Sticker | Redline Fan', 'rifle', 'milspec',
                  {'fn': 5.0}, item_type='sticker'),
    ]
