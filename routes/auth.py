from flask import Blueprint, request, redirect, jsonify, session, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import db, User
from services import is_admin
from services.oauth import (OAuthError, is_oauth_configured, generate_state, verify_state,
                            build_authorization_url, exchange_code_for_token, fetch_userinfo,
                            sign_in_user)

auth_bp = Blueprint('auth', __name__)

def get_redirect_uri():
    return f"{current_app.config['BASE_URL']}/auth/callback"

@auth_bp.route('/auth/login')
def login():
    """Start Google sign-in"""
    if not is_oauth_configured():
        return jsonify({'error': 'Google sign-in is not configured'}), 503

    nonce, state = generate_state()
    session['oauth_nonce'] = nonce
    return redirect(build_authorization_url(state, get_redirect_uri()))

@auth_bp.route('/auth/callback')
def callback():
    """Finish Google sign-in and open a session"""
    if request.args.get('error'):
        print(f"[Auth] Provider returned error: {request.args.get('error')}")
        return jsonify({'error': 'Sign-in was cancelled or denied'}), 400

    if not verify_state(request.args.get('state'), session.pop('oauth_nonce', None)):
        return jsonify({'error': 'Invalid or expired sign-in state'}), 400

    code = request.args.get('code')
    if not code:
        return jsonify({'error': 'Authorization code missing'}), 400

    try:
        access_token = exchange_code_for_token(code, get_redirect_uri())
        profile = fetch_userinfo(access_token)
    except OAuthError as e:
        print(f"[Auth] {e}")
        return jsonify({'error': 'Sign-in with Google failed'}), 502

    try:
        user = sign_in_user(profile['email'], profile.get('name'), profile.get('picture'))
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[Auth] Error creating user for {profile['email']}: {e}")
        return jsonify({'error': 'Failed to create user'}), 500

    session.permanent = True
    session['user_email'] = user.email
    session['user_id'] = user.id
    print(f"[Auth] Signed in {user.email}")

    return redirect(current_app.config['BASE_URL'])

@auth_bp.route('/auth/logout')
def logout():
    session.pop('user_email', None)
    session.pop('user_id', None)
    return redirect(current_app.config['BASE_URL'])

@auth_bp.route('/api/auth/session')
def current_session():
    """Who is signed in, with fresh profile data"""
    email = session.get('user_email')
    user = User.query.filter_by(email=email).first() if email else None
    if not user:
        return jsonify({'user': None})

    data = user.to_dict()
    data['is_admin'] = is_admin(user.email)
    return jsonify({'user': data})
