from flask import Flask
from flask_sqlalchemy import SQLAlchemy
import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Initialize Flask extensions
db = SQLAlchemy()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


def create_app(config=None):
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'default_secret_key_for_development')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URI', 'sqlite:///:memory:')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    # JSON API: forms are validated without CSRF tokens
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['SEED_DATA'] = _env_flag('SEED_DATA', True)
    app.config['LOG_LEVEL'] = os.getenv('LOG_LEVEL', 'INFO').upper()
    if config:
        app.config.update(config)

    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger('lifeline').setLevel(app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)

    from lifeline.errors import register_error_handlers
    from lifeline.services.store import RegistryStore
    from lifeline.commands import register_commands

    register_error_handlers(app)
    register_commands(app)

    # Register blueprints
    from lifeline.routes.donors import donors
    from lifeline.routes.blood_requests import blood_requests
    from lifeline.routes.donor_responses import donor_responses
    from lifeline.routes.life_saver import life_saver
    from lifeline.routes.main import main

    app.register_blueprint(donors, url_prefix='/api/donors')
    app.register_blueprint(blood_requests, url_prefix='/api/blood-requests')
    app.register_blueprint(donor_responses, url_prefix='/api/donor-responses')
    app.register_blueprint(life_saver, url_prefix='/api/life-saver-requests')
    app.register_blueprint(main, url_prefix='/api')

    # One store per application, shared by every request
    store = RegistryStore(db)
    app.extensions['registry'] = store

    # Create database tables
    with app.app_context():
        db.create_all()
        if app.config['SEED_DATA']:
            from lifeline.seed import seed_data
            seed_data(db.session)

    return app
