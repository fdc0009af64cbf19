import itertools

import pytest
from sqlalchemy.exc import OperationalError

from lifeline import create_app

TEST_CONFIG = {
    'TESTING': True,
    'SEED_DATA': False,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
}

_emails = itertools.count(1)


@pytest.fixture
def app():
    return create_app(TEST_CONFIG)


@pytest.fixture
def seeded_app():
    return create_app(dict(TEST_CONFIG, SEED_DATA=True))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield app.extensions['registry']


def donor_data(**overrides):
    data = {
        'full_name': 'Test Donor',
        'email': f'donor{next(_emails)}@email.com',
        'phone': '+91 90000 00000',
        'blood_type': 'O+',
        'date_of_birth': '1990-01-01',
        'gender': 'female',
        'weight': 65,
        'address': '1 Test Street, Pune',
    }
    data.update(overrides)
    return data


def life_saver_data(donor, **overrides):
    data = {
        'requester_name': 'Asha Rao',
        'requester_email': 'asha.rao@email.com',
        'requester_phone': '+91 91111 22222',
        'selected_donor_id': donor.id,
        'blood_type': donor.blood_type.value,
        'units_required': 2,
        'urgency_level': 'critical',
        'hospital': 'City Hospital',
        'request_reason': 'Surgery',
        'notes': '',
    }
    data.update(overrides)
    return data


def failing_commit():
    raise OperationalError('COMMIT', {}, Exception('disk I/O error'))


@pytest.fixture
def add_donor(store):
    """Register a donor and apply admin-side fields (verified by default)."""
    def _add_donor(blood_type='O+', rating='0', total_donations=0,
                   is_available=True, is_verified=True, **fields):
        donor = store.create_donor(donor_data(blood_type=blood_type, **fields))
        return store.update_donor(donor.id, {
            'rating': rating,
            'total_donations': total_donations,
            'is_available': is_available,
            'is_verified': is_verified,
        })
    return _add_donor


@pytest.fixture
def add_request(store):
    def _add_request(donor, **overrides):
        return store.create_life_saver_request(life_saver_data(donor, **overrides))
    return _add_request
