from datetime import datetime
from flask import Blueprint, request, jsonify, g
from sqlalchemy.exc import SQLAlchemyError
from models import db
from services import login_required
from utils import is_valid_steam_trade_url, is_valid_phone_number

profile_bp = Blueprint('profile', __name__, url_prefix='/api/profile')

PROFILE_FIELDS = {
    'trade_link': (is_valid_steam_trade_url, 'Please enter a valid Steam trade URL'),
    'phone_number': (is_valid_phone_number, 'Please enter a valid phone number'),
}

@profile_bp.route('', methods=['GET'])
@login_required
def get_profile():
    return jsonify(g.user.to_dict())

@profile_bp.route('', methods=['PUT'])
@login_required
def update_profile():
    """Update the trade link and phone number. Empty values clear a field."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not body:
        return jsonify({'error': 'Profile updates must be a non-empty JSON object'}), 400

    rejected = sorted(set(body) - set(PROFILE_FIELDS))
    if rejected:
        return jsonify({'error': f"Fields cannot be updated: {', '.join(rejected)}"}), 400

    changes = {}
    for field, value in body.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            changes[field] = None
            continue

        validator, message = PROFILE_FIELDS[field]
        if not isinstance(value, str) or not validator(value.strip()):
            return jsonify({'error': message}), 400
        changes[field] = value.strip()

    try:
        for field, value in changes.items():
            setattr(g.user, field, value)
        g.user.updated_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[Profile] Error updating profile for {g.user.email}: {e}")
        return jsonify({'error': 'Failed to update profile'}), 500

    print(f"[Profile] Updated {', '.join(changes)} for {g.user.email}")
    return jsonify(g.user.to_dict())
