"""
Authentication views.

Login hands out both a DRF token (``Authorization: Token ...``) and a
simplejwt access/refresh pair (``Authorization: Bearer ...``) so that the
dashboards can use either scheme.  These views live apart from
``clinic.authentication`` to avoid circular imports while REST framework
initialises its authentication classes.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from clinic.exceptions import ValidationError
from clinic.serializers.auth import LoginSerializer
from clinic.serializers.base import validated
from clinic.services.audit import log_action

logger = logging.getLogger(__name__)


def user_block(user) -> dict:
    return {'id': user.id, 'name': user.display_name, 'email': user.email, 'role': user.role}


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Username (or email) + password login.

    Inactive accounts are refused by Django's ``ModelBackend`` and get
    the same answer as a wrong password.
    """
    vd = validated(LoginSerializer, request.data)
    account = vd['account']
    user = authenticate(request, username=account, password=vd['password'])
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'account': account, 'ip': request.META.get('REMOTE_ADDR')})
        logger.info('failed login for %s', account)
        return Response({'success': False, 'message': 'Invalid credentials',
                         'error': {'code': 'invalid_credentials', 'detail': 'Invalid credentials'}},
                        status=status.HTTP_401_UNAUTHORIZED)

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})

    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return Response({
        'success': True,
        'data': {
            'token': token_obj.key,
            'access': str(refresh.access_token),
            'refresh': str(refresh),
            'user': user_block(user),
        },
    })

# DRF ScopedRateThrottle uses throttle_scope on the view function
login_view.throttle_scope = 'login'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    """The signed-in account, in the same shape as the login response."""
    return Response({'success': True, 'data': user_block(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    resp = TokenRefreshView.as_view()(request._request)
    if resp.status_code != 200:
        return resp
    return Response({'success': True, 'data': dict(resp.data)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist one refresh token, or every outstanding one for the caller."""
    refresh = request.data.get('refresh')
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            raise ValidationError(str(e), field='refresh')
        count = 1
    else:
        count = 0
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    return Response({'success': True, 'data': {'blacklisted': count}})
