from .database import db
from .user import User
from .skin import Skin, SkinConditionPrice
from .ticket import Ticket, TICKET_TYPES, TICKET_STATUSES

__all__ = ['db', 'User', 'Skin', 'SkinConditionPrice', 'Ticket', 'TICKET_TYPES', 'TICKET_STATUSES']
