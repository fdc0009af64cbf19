import re

from flask import request
from werkzeug.datastructures import ImmutableMultiDict

from lifeline.errors import ValidationError

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_snake(name):
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def snake_to_camel(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _form_value(value):
    # Render JSON scalars the way a browser would submit them
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return ''
    return str(value)


def json_payload():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError(errors={'body': ['Expected a JSON object.']})
    return {camel_to_snake(key): value for key, value in payload.items()}


def validate_payload(form_class):
    """
    Validate the JSON body of the current request with a FlaskForm.

    Returns a dict of the cleaned values for the fields present in the body, so
    that a partial body only touches the fields it names. Unknown keys are dropped.
    Raises ValidationError with camelCase field errors when the form rejects it.
    """
    payload = json_payload()
    nested = [key for key, value in payload.items() if isinstance(value, (dict, list))]
    if nested:
        raise ValidationError(errors={snake_to_camel(key): ['Expected a single value.'] for key in nested})
    formdata = ImmutableMultiDict({key: _form_value(value) for key, value in payload.items()})
    form = form_class(formdata=formdata, meta={'csrf': False})
    if not form.validate():
        raise ValidationError(errors={
            snake_to_camel(name): messages for name, messages in form.errors.items()
        })
    return {key: form[key].data for key in payload if key in form}
