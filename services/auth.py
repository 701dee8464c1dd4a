from functools import wraps
from flask import session, jsonify, current_app, g
from models import User

def is_admin(email):
    """Check an email against the configured admin allowlist"""
    if not email:
        return False
    return email.strip().lower() in current_app.config.get('ADMIN_EMAILS', [])

def login_required(f):
    """Decorator to require a signed-in user with a users row"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        email = session.get('user_email')
        if not email:
            return jsonify({'error': 'Unauthorized'}), 401

        user = User.query.filter_by(email=email).first()
        if not user:
            print(f"[Auth] User not found for session email {email}")
            return jsonify({'error': 'User not found'}), 404

        g.user = user
        return f(*args, **kwargs)
    return decorated_function

def admin_required(f):
    """Decorator to require an allowlisted admin session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        email = session.get('user_email')
        if not is_admin(email):
            return jsonify({'error': 'Admin access required'}), 403

        g.admin_email = email
        return f(*args, **kwargs)
    return decorated_function
