from flask import Blueprint, jsonify
from lifeline.errors import NotFoundError
from lifeline.forms.request_forms import LifeSaverRequestForm, LifeSaverUpdateForm
from lifeline.services import get_store
from lifeline.utils.payload import validate_payload

life_saver = Blueprint('life_saver', __name__)

REASSIGNED_HEADER = 'X-Reassigned-Request-Id'


@life_saver.route('', methods=['POST'])
def create_life_saver_request():
    data = validate_payload(LifeSaverRequestForm)
    life_saver_request = get_store().create_life_saver_request(data)
    return jsonify(life_saver_request.to_dict())


@life_saver.route('', methods=['GET'])
def list_life_saver_requests():
    return jsonify([r.to_dict() for r in get_store().get_all_life_saver_requests()])


@life_saver.route('/<request_id>', methods=['GET'])
def get_life_saver_request(request_id):
    life_saver_request = get_store().get_life_saver_request(request_id)
    if life_saver_request is None:
        raise NotFoundError('Life saver request')
    return jsonify(life_saver_request.to_dict())


@life_saver.route('/<request_id>', methods=['PATCH'])
def update_life_saver_request(request_id):
    changes = validate_payload(LifeSaverUpdateForm)
    result = get_store().update_life_saver_request(request_id, changes)

    response = jsonify(result.request.to_dict())
    # The body stays the updated request; a follow-up made for a decline is named in a header
    if result.reassignment is not None:
        response.headers[REASSIGNED_HEADER] = result.reassignment.id
    return response
