import re

from werkzeug.datastructures import MultiDict

from utils import (generate_ticket_id, get_condition_name, is_valid_steam_trade_url,
                   is_valid_phone_number, parse_csv_arg, get_pagination, paginated_response)


def test_generate_ticket_id_format():
    ticket_id = generate_ticket_id()
    assert re.fullmatch(r'LILO-\d{13}-[A-Z0-9]{5}', ticket_id)
    assert generate_ticket_id() != ticket_id


def test_get_condition_name():
    assert get_condition_name('fn') == 'Factory New'
    assert get_condition_name('bs') == 'Battle-Scarred'
    assert get_condition_name('zz') == 'Unknown'
    assert get_condition_name(None) == 'Unknown'


def test_steam_trade_url():
    assert is_valid_steam_trade_url('https://steamcommunity.com/tradeoffer/new/?partner=42&token=aB3_-x')
    assert not is_valid_steam_trade_url('http://steamcommunity.com/tradeoffer/new/?partner=42&token=aB3')
    assert not is_valid_steam_trade_url('https://steamcommunity.com/tradeoffer/new/?partner=abc&token=aB3')


def test_phone_number():
    assert is_valid_phone_number('+45 12 34 56 78')
    assert is_valid_phone_number('(555) 123-4567')
    assert not is_valid_phone_number('0123')
    assert not is_valid_phone_number('phone')


def test_parse_csv_arg():
    assert parse_csv_arg('rifle, pistol,,') == ['rifle', 'pistol']
    assert parse_csv_arg(None) == []


def test_get_pagination():
    assert get_pagination(MultiDict(), 12) == (1, 12)
    assert get_pagination(MultiDict({'page': '3', 'limit': '5'}), 12) == (3, 5)
    assert get_pagination(MultiDict({'page': '-2', 'limit': '999'}), 12) == (1, 50)
    assert get_pagination(MultiDict({'page': 'x', 'limit': 'y'}), 10) == (1, 10)


def test_paginated_response():
    response = paginated_response(['a'], 25, 2, 12)
    assert response == {'data': ['a'], 'total': 25, 'page': 2, 'limit': 12, 'totalPages': 3}
    assert paginated_response([], 0, 1, 12)['totalPages'] == 0
