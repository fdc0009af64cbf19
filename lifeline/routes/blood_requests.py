from flask import Blueprint, jsonify
from lifeline.errors import NotFoundError
from lifeline.forms.request_forms import BloodRequestForm, BloodRequestUpdateForm
from lifeline.services import get_store
from lifeline.utils.payload import validate_payload

blood_requests = Blueprint('blood_requests', __name__)


@blood_requests.route('', methods=['POST'])
def create_blood_request():
    data = validate_payload(BloodRequestForm)
    blood_request = get_store().create_blood_request(data)
    return jsonify(blood_request.to_dict())


@blood_requests.route('', methods=['GET'])
def list_blood_requests():
    return jsonify([r.to_dict() for r in get_store().get_all_blood_requests()])


@blood_requests.route('/active', methods=['GET'])
def list_active_blood_requests():
    return jsonify([r.to_dict() for r in get_store().get_active_blood_requests()])


@blood_requests.route('/<request_id>', methods=['GET'])
def get_blood_request(request_id):
    blood_request = get_store().get_blood_request(request_id)
    if blood_request is None:
        raise NotFoundError('Blood request')
    return jsonify(blood_request.to_dict())


@blood_requests.route('/<request_id>', methods=['PATCH'])
def update_blood_request(request_id):
    changes = validate_payload(BloodRequestUpdateForm)
    blood_request = get_store().update_blood_request(request_id, changes)
    return jsonify(blood_request.to_dict())
