from .auth import auth_bp
from .tickets import tickets_bp
from .admin import admin_bp
from .skins import skins_bp
from .profile import profile_bp

def register_blueprints(app):
    """Register all blueprints with the Flask app"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(tickets_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(skins_bp)
    app.register_blueprint(profile_bp)
