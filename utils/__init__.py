from .helpers import (generate_ticket_id, get_condition_name, is_valid_steam_trade_url,
                      is_valid_phone_number, parse_csv_arg, get_pagination, paginated_response)
from .constants import APP_NAME, SKIN_CONDITIONS, SKIN_RARITIES

__all__ = ['generate_ticket_id', 'get_condition_name', 'is_valid_steam_trade_url',
           'is_valid_phone_number', 'parse_csv_arg', 'get_pagination', 'paginated_response',
           'APP_NAME', 'SKIN_CONDITIONS', 'SKIN_RARITIES']
