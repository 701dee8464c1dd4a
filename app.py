#!/usr/bin/env python3
"""
Lilo Store - CS2 skin trading ticket desk
A Flask API for browsing skins and handling manually reviewed buy/sell tickets.
"""

import os
from datetime import timedelta
from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_mail import Mail
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

# Import our modules
from models import db
from utils.banner import print_startup_banner
from routes import register_blueprints

# Load environment variables from .env file
load_dotenv()

def parse_admin_emails(value):
    """Accept a comma separated string or a list of emails"""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [email.strip().lower() for email in value if email and email.strip()]

def register_error_handlers(app):
    """JSON errors for the API instead of HTML pages"""
    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        print(f"[App] Unhandled error on {request.method} {request.path}: {error!r}")
        return jsonify({'error': 'Internal server error'}), 500

def create_app(test_config=None):
    """Application factory pattern"""
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///lilo_store.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(days=30)
    app.config['BASE_URL'] = os.environ.get('BASE_URL', 'http://localhost:5000')
    app.config['ADMIN_EMAILS'] = os.environ.get('ADMIN_EMAILS', '')

    # Google OAuth
    app.config['GOOGLE_CLIENT_ID'] = os.environ.get('GOOGLE_CLIENT_ID', '')
    app.config['GOOGLE_CLIENT_SECRET'] = os.environ.get('GOOGLE_CLIENT_SECRET', '')

    # Email notifications (disabled when MAIL_SERVER is unset)
    app.config['MAIL_SERVER'] = os.environ.get('MAIL_SERVER')
    app.config['MAIL_PORT'] = int(os.environ.get('MAIL_PORT', '587'))
    app.config['MAIL_USE_TLS'] = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
    app.config['MAIL_USERNAME'] = os.environ.get('MAIL_USERNAME')
    app.config['MAIL_PASSWORD'] = os.environ.get('MAIL_PASSWORD')
    app.config['MAIL_DEFAULT_SENDER'] = os.environ.get('MAIL_DEFAULT_SENDER', 'Lilo Store <no-reply@lilo.store>')

    if test_config:
        app.config.update(test_config)

    app.config['ADMIN_EMAILS'] = parse_admin_emails(app.config['ADMIN_EMAILS'])
    app.config['BASE_URL'] = app.config['BASE_URL'].rstrip('/')

    # Handle PostgreSQL URL format for SQLAlchemy 2.0+
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('postgres://'):
        app.config['SQLALCHEMY_DATABASE_URI'] = (
            app.config['SQLALCHEMY_DATABASE_URI'].replace('postgres://', 'postgresql://', 1)
        )

    print_startup_banner(app)

    # Initialize extensions
    db.init_app(app)
    Mail(app)
    Migrate(app, db)

    # Register blueprints
    register_blueprints(app)
    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    # Database migrations are handled by Flask-Migrate
    # Run: flask db upgrade (in production)

    return app

# Create the application
app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
