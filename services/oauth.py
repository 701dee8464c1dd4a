"""
Google OAuth 2.0 authorization-code flow.
"""
import secrets
import uuid
from datetime import datetime
from urllib.parse import urlencode

import requests
from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from models import db, User

GOOGLE_AUTHORIZE_URL = 'https://accounts.google.com/o/oauth2/v2/auth'
GOOGLE_TOKEN_URL = 'https://oauth2.googleapis.com/token'
GOOGLE_USERINFO_URL = 'https://openidconnect.googleapis.com/v1/userinfo'

STATE_SALT = 'oauth-state'
STATE_MAX_AGE = 600  # 10 minutes
REQUEST_TIMEOUT = 30


class OAuthError(Exception):
    """Raised when the identity provider rejects or fails a request."""


def is_oauth_configured():
    return bool(current_app.config.get('GOOGLE_CLIENT_ID') and
                current_app.config.get('GOOGLE_CLIENT_SECRET'))

def get_serializer():
    """Get the token serializer"""
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'])

def generate_state():
    """Return (nonce, signed state). The nonce is kept in the session."""
    nonce = secrets.token_urlsafe(16)
    return nonce, get_serializer().dumps(nonce, salt=STATE_SALT)

def verify_state(state, expected_nonce, max_age=STATE_MAX_AGE):
    """Check a returned state against the nonce stored at login"""
    if not state or not expected_nonce:
        return False
    try:
        nonce = get_serializer().loads(state, salt=STATE_SALT, max_age=max_age)
    except (BadSignature, SignatureExpired):
        return False
    return secrets.compare_digest(nonce, expected_nonce)

def build_authorization_url(state, redirect_uri):
    params = {
        'client_id': current_app.config['GOOGLE_CLIENT_ID'],
        'redirect_uri': redirect_uri,
        'response_type': 'code',
        'scope': 'openid email profile',
        'state': state,
        'prompt': 'select_account',
    }
    return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(params)}"

def exchange_code_for_token(code, redirect_uri):
    """Exchange an authorization code for an access token"""
    data = {
        'grant_type': 'authorization_code',
        'code': code,
        'redirect_uri': redirect_uri,
        'client_id': current_app.config['GOOGLE_CLIENT_ID'],
        'client_secret': current_app.config['GOOGLE_CLIENT_SECRET'],
    }

    try:
        response = requests.post(GOOGLE_TOKEN_URL, data=data, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise OAuthError(f"Token exchange failed: {e}") from e

    token = response.json()
    if 'access_token' not in token:
        raise OAuthError("Token response did not contain an access token")
    return token['access_token']

def fetch_userinfo(access_token):
    """Fetch the signed-in account's email, name and picture"""
    try:
        response = requests.get(
            GOOGLE_USERINFO_URL,
            headers={'Authorization': f"Bearer {access_token}"},
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise OAuthError(f"Userinfo request failed: {e}") from e

    profile = response.json()
    if not profile.get('email'):
        raise OAuthError("Identity provider did not return an email address")
    return profile

def sign_in_user(email, name=None, avatar_url=None):
    """Find the user row for an email, creating it on first sign-in"""
    user = User.query.filter_by(email=email).first()
    if user:
        print(f"[Auth] Existing user found: {user.id}")
        return user

    now = datetime.utcnow()
    user = User(
        id=str(uuid.uuid4()),
        email=email,
        name=name,
        avatar_url=avatar_url,
        created_at=now,
        updated_at=now
    )
    db.session.add(user)
    db.session.commit()

    print(f"[Auth] Created new user {user.id} for {email}")
    return user
