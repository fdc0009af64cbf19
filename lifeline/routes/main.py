from flask import Blueprint, jsonify
from lifeline.services import get_store

main = Blueprint('main', __name__)


@main.route('/stats')
def stats():
    return jsonify(get_store().get_stats())
