from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

from lifeline import db


class RegistryError(Exception):
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message

    def to_dict(self):
        return {'message': self.message}


class ValidationError(RegistryError):
    """Malformed or missing input; `errors` maps field names to messages."""
    status_code = 400
    message = 'Invalid data'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


class NotFoundError(RegistryError):
    status_code = 404

    def __init__(self, entity):
        super().__init__(f'{entity} not found')
        self.entity = entity


class InternalError(RegistryError):
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(RegistryError)
    def handle_registry_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            current_app.logger.error(f"Registry failure: {error}")
            return jsonify({'message': InternalError.message}), 500
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {error}")
        return jsonify({'message': InternalError.message}), 500
