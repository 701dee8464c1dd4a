import math
from flask import Blueprint, request, jsonify, g
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from models import db, Ticket, TICKET_STATUSES
from services import admin_required
from utils.notifications import notify_user_quote_sent
from .tickets import validate_ticket_updates, apply_ticket_updates

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

# Fields staff may change when reviewing a ticket
ADMIN_EDITABLE_FIELDS = ('status', 'quoted_price', 'price', 'admin_notes', 'notes')
PRICE_FIELDS = ('quoted_price', 'price')

def validate_prices(updates):
    """Prices must be finite non-negative numbers or null"""
    for field in PRICE_FIELDS:
        if field not in updates or updates[field] is None:
            continue
        value = updates[field]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"Invalid {field}. Must be a non-negative number"
        # JSON accepts NaN and Infinity literals
        if (isinstance(value, float) and not math.isfinite(value)) or value < 0:
            return f"Invalid {field}. Must be a non-negative number"
    return None

def ticket_stats():
    """Ticket counts per status for the dashboard header"""
    counts = dict(db.session.query(Ticket.status, func.count(Ticket.id)).group_by(Ticket.status).all())
    return {status: counts.get(status, 0) for status in TICKET_STATUSES}

@admin_bp.route('/tickets', methods=['GET'])
@admin_required
def list_all_tickets():
    """List tickets across all users (admin only)"""
    status = request.args.get('status')
    ticket_type = request.args.get('type')

    print(f"[Admin] {g.admin_email} fetching all tickets")

    query = Ticket.query
    if status:
        query = query.filter_by(status=status)
    if ticket_type:
        query = query.filter_by(type=ticket_type)

    try:
        tickets = query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()
        stats = ticket_stats()
    except SQLAlchemyError as e:
        print(f"[Admin] Error fetching tickets: {e}")
        return jsonify({'error': 'Failed to fetch tickets'}), 500

    print(f"[Admin] Fetched {len(tickets)} tickets")

    return jsonify({
        'tickets': [ticket.to_dict() for ticket in tickets],
        'total': len(tickets),
        'stats': stats
    })

@admin_bp.route('/tickets', methods=['PUT'])
@admin_required
def update_any_ticket():
    """Quote, progress, complete or cancel any ticket (admin only)"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    ticket_id = body.get('ticketId')
    updates = body.get('updates')

    if not ticket_id or not isinstance(ticket_id, str):
        return jsonify({'error': 'Ticket ID required'}), 400

    error = validate_ticket_updates(updates, ADMIN_EDITABLE_FIELDS) or validate_prices(updates)
    if error:
        return jsonify({'error': error}), 400

    ticket = db.session.get(Ticket, ticket_id)
    if not ticket:
        return jsonify({'error': 'Ticket not found'}), 404

    print(f"[Admin] {g.admin_email} updating ticket {ticket_id}: {updates}")

    try:
        apply_ticket_updates(ticket, updates)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[Admin] Error updating ticket {ticket_id}: {e}")
        return jsonify({'error': 'Failed to update ticket'}), 500

    if updates.get('status') == 'quote_sent':
        notify_user_quote_sent(ticket)

    print(f"[Admin] Updated ticket {ticket_id} successfully")
    return jsonify({'ticket': ticket.to_dict()})
