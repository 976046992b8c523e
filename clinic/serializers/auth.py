from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """Accepts either ``username`` or ``email`` plus ``password``."""
    username = serializers.CharField(required=False, allow_blank=True)
    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(trim_whitespace=False)

    def validate(self, attrs):
        account = (attrs.get('username') or attrs.get('email') or '').strip()
        if not account:
            raise serializers.ValidationError('username or email is required')
        attrs['account'] = account.lower() if '@' in account else account
        return attrs

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('password is required')
        return v
