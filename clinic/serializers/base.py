from rest_framework import serializers

from clinic.exceptions import ValidationError


def _first_message(errors):
    while isinstance(errors, (list, dict)) and errors:
        errors = errors[0] if isinstance(errors, list) else next(iter(errors.values()))
    return str(errors)


def check(s):
    """Validate serializer ``s`` and stop at the first bad field.

    Errors surface as :class:`clinic.exceptions.ValidationError` naming the
    field, in declaration order, instead of DRF's accumulated error dict.
    """
    if not s.is_valid():
        field, errors = next(iter(s.errors.items()))
        message = _first_message(errors)
        if field == 'non_field_errors':
            raise ValidationError(message)
        raise ValidationError(f'{field}: {message}', field=field)
    return s


def validated(serializer_class, data, **kwargs) -> dict:
    return check(serializer_class(data=data, **kwargs)).validated_data


class BriefUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(source='display_name')
    email = serializers.EmailField()
    role = serializers.CharField()
    specialization = serializers.CharField()
