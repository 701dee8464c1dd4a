from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def isoformat(value):
    """Serialize an optional datetime column for JSON responses"""
    return value.isoformat() if value else None
