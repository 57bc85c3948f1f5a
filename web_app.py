#!/usr/bin/env python3
"""
Furima Market Web App - Main Entry Point
========================================
PostgreSQL-backed flea-market application.

This file serves as the entry point that:
- Builds the Flask app from config.Config (create_app)
- Sets up sessions and Flask-Login authentication
- Registers all route blueprints
"""

import logging
import os
from pathlib import Path

import redis
from flask import Flask, render_template, redirect, url_for, flash, send_from_directory
from flask_login import LoginManager, UserMixin
from flask_session import Session
from dotenv import load_dotenv

from config import Config, DEFAULT_SECRET_KEY
from src.database import get_db
from src.schema import ITEM_LOOKUPS, PRICE_MAX, PRICE_MIN, Prefecture
from src.storage import ImageStore

# Load environment
load_dotenv()

logger = logging.getLogger(__name__)

LOGIN_REQUIRED_MESSAGE = "You need to sign in or sign up before continuing."
UPLOAD_TOO_LARGE_MESSAGE = "画像のファイルサイズが大きすぎます"


# ============================================================================
# USER MODEL FOR FLASK-LOGIN
# ============================================================================

class User(UserMixin):
    """Signed-in member"""

    def __init__(self, user_id, nickname, email):
        self.id = user_id
        self.nickname = nickname
        self.email = email

    @staticmethod
    def from_row(user_data):
        return User(user_data['id'], user_data['nickname'], user_data['email'])


# ============================================================================
# APP SETUP HELPERS
# ============================================================================

def configure_logging(app):
    level_name = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.logger.setLevel(level)


def configure_sessions(app):
    """Use Redis-backed server-side sessions when REDIS_URL is set.

    Returns True when Flask-Session was installed, False for the default
    signed cookie sessions.
    """
    redis_url = app.config.get('REDIS_URL')
    if not redis_url:
        logger.info("Using signed cookie sessions (REDIS_URL not set)")
        return False

    session_redis = redis.from_url(
        redis_url,
        decode_responses=False,  # Keep binary for session data
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    app.config['SESSION_TYPE'] = 'redis'
    app.config['SESSION_REDIS'] = session_redis
    app.config['SESSION_PERMANENT'] = True
    Session(app)

    logger.info("Using Redis sessions (prefix %s)", app.config.get('SESSION_KEY_PREFIX'))
    return True


def init_login_manager(app, db):
    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = LOGIN_REQUIRED_MESSAGE
    login_manager.login_message_category = 'alert'

    @login_manager.user_loader
    def load_user(user_id):
        """Load user for Flask-Login"""
        try:
            user_data = db.get_user_by_id(int(user_id))
        except (TypeError, ValueError):
            logger.warning("[USER_LOADER] Invalid user_id in session: %r", user_id)
            return None
        return User.from_row(user_data) if user_data else None

    return login_manager


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(config_object=None, database=None):
    """Build the Flask app; tests pass their own config and database"""
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    configure_logging(app)

    if app.config.get('SECRET_KEY') == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY not set - using the development default")

    Path(app.config['UPLOAD_FOLDER']).mkdir(parents=True, exist_ok=True)
    configure_sessions(app)

    db = database if database is not None else get_db()
    image_store = ImageStore(app.config['UPLOAD_FOLDER'])
    init_login_manager(app, db)

    # Import blueprints
    from routes_auth import auth_bp, init_routes as init_auth
    from routes_items import items_bp, init_routes as init_items
    from routes_transactions import transactions_bp, init_routes as init_transactions

    # Initialize blueprints with database instance and User class
    init_auth(db, User)
    init_items(db, image_store)
    init_transactions(db)

    app.register_blueprint(auth_bp)
    app.register_blueprint(items_bp)
    app.register_blueprint(transactions_bp)

    @app.context_processor
    def inject_lookups():
        return {
            'lookups': ITEM_LOOKUPS,
            'prefectures': Prefecture,
            'price_range': (PRICE_MIN, PRICE_MAX),
        }

    @app.template_filter('yen')
    def format_yen(value):
        return f"¥{int(value):,}"

    @app.route('/uploads/<path:filename>')
    def serve_upload(filename):
        """Serve stored item images"""
        return send_from_directory(str(image_store.root.resolve()), filename)

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(413)
    def upload_too_large(error):
        flash(UPLOAD_TOO_LARGE_MESSAGE, 'alert')
        return redirect(url_for('items.index'))

    logger.info("Flask app initialized and ready to serve requests")
    return app


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == '__main__':
    app = create_app()
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    app.run(host='0.0.0.0', port=port, debug=debug)
