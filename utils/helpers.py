import math
import random
import re
import string
import time
from .constants import SKIN_CONDITIONS, MAX_PER_PAGE

# Configuration
TICKET_ID_PREFIX = 'LILO'
TICKET_ID_SUFFIX_LENGTH = 5
TICKET_ID_ALPHABET = string.ascii_uppercase + string.digits

STEAM_TRADE_URL_PATTERN = re.compile(
    r'^https://steamcommunity\.com/tradeoffer/new/\?partner=\d+&token=[a-zA-Z0-9_-]+$'
)
PHONE_NUMBER_PATTERN = re.compile(r'^\+?[1-9]\d{1,14}$')

def generate_ticket_id():
    """Generate a ticket id like LILO-1718000000000-X7K2P"""
    suffix = ''.join(random.choices(TICKET_ID_ALPHABET, k=TICKET_ID_SUFFIX_LENGTH))
    return f"{TICKET_ID_PREFIX}-{int(time.time() * 1000)}-{suffix}"

def get_condition_name(condition):
    """Display name for a condition code, 'Unknown' for anything else"""
    condition_data = SKIN_CONDITIONS.get(condition)
    return condition_data['name'] if condition_data else 'Unknown'

def is_valid_steam_trade_url(url):
    return bool(STEAM_TRADE_URL_PATTERN.match(url))

def is_valid_phone_number(phone):
    """Basic international format check, ignoring spaces, dashes and parentheses"""
    return bool(PHONE_NUMBER_PATTERN.match(re.sub(r'[\s\-()]', '', phone)))

def parse_csv_arg(value):
    """Split a comma separated query parameter, dropping empty items"""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]

def get_pagination(args, default_limit):
    """Read page/limit from query args, clamped to sane bounds"""
    page = args.get('page', 1, type=int) or 1
    limit = args.get('limit', default_limit, type=int) or default_limit
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PER_PAGE)
    return page, limit

def paginated_response(items, total, page, limit):
    return {
        'data': items,
        'total': total,
        'page': page,
        'limit': limit,
        'totalPages': math.ceil(total / limit) if limit else 0,
    }
