from flask import current_app


def get_store():
    """
    Returns the registry store bound to the current application
    """
    return current_app.extensions['registry']
