from datetime import datetime
from flask import Blueprint, request, jsonify, g
from sqlalchemy.exc import SQLAlchemyError
from models import db, Ticket, TICKET_TYPES, TICKET_STATUSES
from services import login_required
from utils import generate_ticket_id, get_condition_name, get_pagination, paginated_response
from utils.constants import SKIN_CONDITIONS, TICKETS_PER_PAGE
from utils.notifications import notify_admins_new_ticket

tickets_bp = Blueprint('tickets', __name__, url_prefix='/api/tickets')

# Fields the ticket owner may change
USER_EDITABLE_FIELDS = ('status', 'notes', 'steam_trade_url', 'payment_method')

# Free text columns, string or null only
TEXT_FIELDS = ('notes', 'admin_notes', 'steam_trade_url', 'payment_method')

def invalid_text_field(values):
    """Name of the first text field holding something other than a string or null"""
    for field in TEXT_FIELDS:
        if values.get(field) is not None and not isinstance(values[field], str):
            return field
    return None

def validate_ticket_updates(updates, editable_fields):
    """Return an error message for an invalid partial update, or None"""
    if not isinstance(updates, dict) or not updates:
        return 'Updates must be a non-empty JSON object'

    rejected = sorted(set(updates) - set(editable_fields))
    if rejected:
        return f"Fields cannot be updated: {', '.join(rejected)}"

    if 'status' in updates and updates['status'] not in TICKET_STATUSES:
        return f"Invalid status. Must be one of: {', '.join(TICKET_STATUSES)}"

    field = invalid_text_field(updates)
    if field:
        return f"Invalid {field}. Must be a string or null"

    return None

def apply_ticket_updates(ticket, updates):
    """Merge a validated partial update into the ticket row"""
    for field, value in updates.items():
        setattr(ticket, field, value)
    ticket.updated_at = datetime.utcnow()

@tickets_bp.route('', methods=['GET'])
@login_required
def list_tickets():
    """List the signed-in user's tickets, newest first"""
    page, limit = get_pagination(request.args, TICKETS_PER_PAGE)
    status = request.args.get('status')
    ticket_type = request.args.get('type')

    print(f"[Tickets] Fetching tickets for user: {g.user.email}")

    query = Ticket.query.filter_by(user_id=g.user.id)
    if status:
        query = query.filter_by(status=status)
    if ticket_type:
        query = query.filter_by(type=ticket_type)

    try:
        total = query.count()
        tickets = (query.order_by(Ticket.created_at.desc(), Ticket.id.desc())
                   .offset((page - 1) * limit)
                   .limit(limit)
                   .all())
    except SQLAlchemyError as e:
        print(f"[Tickets] Error fetching tickets: {e}")
        return jsonify({'error': 'Failed to fetch tickets'}), 500

    print(f"[Tickets] Fetched {len(tickets)} tickets")
    return jsonify(paginated_response([ticket.to_dict() for ticket in tickets], total, page, limit))

@tickets_bp.route('', methods=['POST'])
@login_required
def create_ticket():
    """Create a new buy or sell request"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    ticket_type = body.get('type')
    skin_name = body.get('skin_name')
    if isinstance(skin_name, str):
        skin_name = skin_name.strip()
    condition = body.get('condition')

    # Validate inputs
    if not all([ticket_type, skin_name, condition]):
        return jsonify({'error': 'Missing required fields: type, skin_name, condition'}), 400

    if not isinstance(skin_name, str):
        return jsonify({'error': 'Invalid skin_name. Must be a string'}), 400

    if ticket_type not in TICKET_TYPES:
        return jsonify({'error': 'Invalid type. Must be "buy" or "sell"'}), 400

    if not isinstance(condition, str) or condition not in SKIN_CONDITIONS:
        return jsonify({'error': f"Invalid condition. Must be one of: {', '.join(SKIN_CONDITIONS)}"}), 400

    notes = body.get('notes')
    if notes is not None and not isinstance(notes, str):
        return jsonify({'error': 'Invalid notes. Must be a string or null'}), 400

    # Generate unique ticket id
    while True:
        ticket_id = generate_ticket_id()
        if not db.session.get(Ticket, ticket_id):
            break

    now = datetime.utcnow()
    ticket = Ticket(
        id=ticket_id,
        user_id=g.user.id,
        type=ticket_type,
        skin_name=skin_name,
        condition=condition,
        condition_name=get_condition_name(condition),
        status='pending',
        notes=notes or None,
        created_at=now,
        updated_at=now
    )

    print(f"[Tickets] Creating {ticket_type} ticket {ticket_id} for user: {g.user.email}")

    try:
        db.session.add(ticket)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[Tickets] Error creating ticket: {e}")
        return jsonify({'error': f"Failed to create ticket: {e}"}), 500

    notify_admins_new_ticket(ticket)

    print(f"[Tickets] Ticket created successfully: {ticket.id}")
    return jsonify(ticket.to_dict()), 201

@tickets_bp.route('', methods=['PUT'])
@login_required
def update_ticket():
    """Update one of the signed-in user's tickets (accept, decline, cancel)"""
    ticket_id = request.args.get('id')
    if not ticket_id:
        return jsonify({'error': 'Ticket ID required'}), 400

    # Only allow users to update their own tickets
    ticket = db.session.get(Ticket, ticket_id)
    if not ticket or ticket.user_id != g.user.id:
        return jsonify({'error': 'Ticket not found or access denied'}), 404

    updates = request.get_json(silent=True)
    error = validate_ticket_updates(updates, USER_EDITABLE_FIELDS)
    if error:
        return jsonify({'error': error}), 400

    try:
        apply_ticket_updates(ticket, updates)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[Tickets] Error updating ticket {ticket_id}: {e}")
        return jsonify({'error': 'Failed to update ticket'}), 500

    print(f"[Tickets] User {g.user.email} updated ticket {ticket_id}: {updates}")
    return jsonify(ticket.to_dict())
