from datetime import datetime, timedelta

from models import db, Ticket
from conftest import make_ticket, login


def test_create_ticket_requires_session(client):
    response = client.post('/api/tickets', json={'type': 'sell', 'skin_name': 'AK-47 | Redline', 'condition': 'ft'})
    assert response.status_code == 401
    assert response.get_json() == {'error': 'Unauthorized'}


def test_session_without_user_row_is_404(client, app):
    login(client, 'ghost@lilo.test')
    response = client.get('/api/tickets')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'User not found'


def test_create_sell_ticket(user_client, user):
    response = user_client.post('/api/tickets', json={
        'type': 'sell',
        'skin_name': '  AK-47 | Redline ',
        'condition': 'ft',
        'notes': 'StatTrak, 0.21 float'
    })

    assert response.status_code == 201
    data = response.get_json()
    assert data['id'].startswith('LILO-')
    assert data['type'] == 'sell'
    assert data['skin_name'] == 'AK-47 | Redline'
    assert data['condition'] == 'ft'
    assert data['condition_name'] == 'Field-Tested'
    assert data['status'] == 'pending'
    assert data['notes'] == 'StatTrak, 0.21 float'
    assert data['user_id'] == user.id
    assert data['users']['email'] == user.email

    ticket = db.session.get(Ticket, data['id'])
    assert ticket is not None
    assert ticket.status == 'pending'


def test_create_ticket_missing_fields(user_client):
    response = user_client.post('/api/tickets', json={'type': 'buy', 'condition': 'fn'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing required fields: type, skin_name, condition'
    assert Ticket.query.count() == 0


def test_create_ticket_blank_skin_name(user_client):
    response = user_client.post('/api/tickets', json={'type': 'buy', 'skin_name': '   ', 'condition': 'fn'})
    assert response.status_code == 400
    assert Ticket.query.count() == 0


def test_create_ticket_invalid_type(user_client):
    response = user_client.post('/api/tickets', json={'type': 'trade', 'skin_name': 'AWP | Asiimov', 'condition': 'fn'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Invalid type. Must be "buy" or "sell"'
    assert Ticket.query.count() == 0


def test_create_ticket_invalid_condition(user_client):
    response = user_client.post('/api/tickets', json={'type': 'buy', 'skin_name': 'AWP | Asiimov', 'condition': 'xx'})
    assert response.status_code == 400
    assert response.get_json()['error'].startswith('Invalid condition')
    assert Ticket.query.count() == 0


def test_list_only_own_tickets_newest_first(user_client, user, other_user):
    base = datetime(2025, 3, 1)
    for day in range(3):
        make_ticket(user, created_at=base + timedelta(days=day), ticket_id=f"LILO-{day}")
    make_ticket(other_user, ticket_id='LILO-OTHER')

    response = user_client.get('/api/tickets')
    assert response.status_code == 200
    data = response.get_json()

    assert data['total'] == 3
    assert [ticket['id'] for ticket in data['data']] == ['LILO-2', 'LILO-1', 'LILO-0']
    assert data['page'] == 1
    assert data['limit'] == 10
    assert data['totalPages'] == 1


def test_list_tickets_pagination_and_filters(user_client, user):
    base = datetime(2025, 3, 1)
    for day in range(5):
        make_ticket(user, created_at=base + timedelta(days=day), ticket_id=f"LILO-{day}",
                    ticket_type='buy' if day % 2 else 'sell')
    make_ticket(user, status='completed', created_at=base - timedelta(days=1), ticket_id='LILO-DONE')

    data = user_client.get('/api/tickets?page=2&limit=2').get_json()
    assert data['total'] == 6
    assert data['totalPages'] == 3
    assert [ticket['id'] for ticket in data['data']] == ['LILO-2', 'LILO-1']

    data = user_client.get('/api/tickets?status=completed').get_json()
    assert [ticket['id'] for ticket in data['data']] == ['LILO-DONE']

    data = user_client.get('/api/tickets?type=buy').get_json()
    assert data['total'] == 2


def test_update_requires_ticket_id(user_client):
    response = user_client.put('/api/tickets', json={'status': 'cancelled'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Ticket ID required'


def test_update_other_users_ticket(user_client, other_user):
    ticket = make_ticket(other_user)
    response = user_client.put(f'/api/tickets?id={ticket.id}', json={'status': 'cancelled'})
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Ticket not found or access denied'
    assert db.session.get(Ticket, ticket.id).status == 'pending'


def test_update_unknown_ticket(user_client):
    response = user_client.put('/api/tickets?id=LILO-NOPE', json={'status': 'cancelled'})
    assert response.status_code == 404


def test_update_rejects_invalid_status(user_client, user):
    ticket = make_ticket(user, status='quote_sent')
    response = user_client.put(f'/api/tickets?id={ticket.id}', json={'status': 'accepted'})
    assert response.status_code == 400
    assert response.get_json()['error'].startswith('Invalid status')
    assert db.session.get(Ticket, ticket.id).status == 'quote_sent'


def test_update_rejects_staff_fields(user_client, user):
    ticket = make_ticket(user, status='quote_sent')
    response = user_client.put(f'/api/tickets?id={ticket.id}', json={'quoted_price': 1, 'admin_notes': 'x'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Fields cannot be updated: admin_notes, quoted_price'
    assert db.session.get(Ticket, ticket.id).quoted_price is None


def test_update_rejects_empty_body(user_client, user):
    ticket = make_ticket(user)
    response = user_client.put(f'/api/tickets?id={ticket.id}', json={})
    assert response.status_code == 400


def test_accept_quote_is_repeatable(user_client, user):
    ticket = make_ticket(user, status='quote_sent')
    url = f'/api/tickets?id={ticket.id}'
    updates = {'status': 'processing', 'steam_trade_url': 'https://steamcommunity.com/tradeoffer/new/?partner=1&token=abc'}

    first = user_client.put(url, json=updates)
    assert first.status_code == 200
    assert first.get_json()['status'] == 'processing'

    second = user_client.put(url, json=updates)
    assert second.status_code == 200
    assert second.get_json()['status'] == 'processing'
    assert second.get_json()['steam_trade_url'] == updates['steam_trade_url']
    assert Ticket.query.count() == 1


def test_sell_ticket_round_trip(user_client):
    created = user_client.post('/api/tickets', json={'type': 'sell', 'skin_name': 'AK-47 | Redline', 'condition': 'ft'})
    assert created.status_code == 201

    data = user_client.get('/api/tickets').get_json()
    assert data['total'] == 1
    assert len(data['data']) == 1
    ticket = data['data'][0]
    assert ticket['id'] == created.get_json()['id']
    assert ticket['status'] == 'pending'
    assert ticket['condition_name'] == 'Field-Tested'


def test_update_requires_session(client, user):
    ticket = make_ticket(user)
    response = client.put(f'/api/tickets?id={ticket.id}', json={'status': 'cancelled'})
    assert response.status_code == 401
    assert db.session.get(Ticket, ticket.id).status == 'pending'


def test_create_ticket_rejects_non_object_body(user_client):
    for body in (['sell', 'AK-47 | Redline', 'ft'], 'sell', 42):
        response = user_client.post('/api/tickets', json=body)
        assert response.status_code == 400, body
        assert response.get_json()['error'] == 'Request body must be a JSON object'
    assert Ticket.query.count() == 0


def test_create_ticket_rejects_non_text_values(user_client):
    base = {'type': 'sell', 'skin_name': 'AK-47 | Redline', 'condition': 'ft'}

    for overrides in ({'notes': {'a': 1}}, {'notes': ['x']}, {'skin_name': ['AK-47']}, {'condition': {'ft': 1}}):
        response = user_client.post('/api/tickets', json={**base, **overrides})
        assert response.status_code == 400, overrides
    assert Ticket.query.count() == 0


def test_update_rejects_non_text_values(user_client, user):
    ticket = make_ticket(user)
    url = f'/api/tickets?id={ticket.id}'

    for updates in ({'notes': {'a': 1}}, {'steam_trade_url': 5}, {'payment_method': ['paypal']}):
        response = user_client.put(url, json=updates)
        assert response.status_code == 400, updates
        assert response.get_json()['error'].startswith('Invalid ')

    assert user_client.put(url, json={'notes': None}).status_code == 200
