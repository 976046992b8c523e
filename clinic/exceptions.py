"""
Domain errors and the unified API exception handler.

Every failure leaves the API as ``{"success": false, "message": ...,
"error": {"code": ..., "detail": ...}}``.  Domain errors carry enough
context (ids, expected role, ward) for the caller to tell which entity
was missing.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ClinicError(APIException):
    """Base class for workflow failures raised by ``clinic.services``."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request failed'
    default_code = 'clinic_error'

    def __init__(self, message: Optional[str] = None, **context: Any):
        super().__init__(detail=message or self.default_detail, code=self.default_code)
        self.message = str(self.detail)
        self.context = context

    def __str__(self) -> str:
        return self.message


class ValidationError(ClinicError):
    default_detail = 'Invalid input'
    default_code = 'validation_error'

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None, **context: Any):
        super().__init__(message, field=field, **context)
        self.field = field


class NotFound(ClinicError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class PatientNotFound(NotFound):
    default_detail = 'Patient not found'
    default_code = 'patient_not_found'

    def __init__(self, patient_id: Any):
        super().__init__(f'Patient {patient_id} not found', patient_id=patient_id)


class BedNotFound(NotFound):
    default_detail = 'Bed not found'
    default_code = 'bed_not_found'

    def __init__(self, bed_id: Any):
        super().__init__(f'Bed {bed_id} not found', bed_id=bed_id)


class StaffNotFound(NotFound):
    default_detail = 'Staff member not found'
    default_code = 'staff_not_found'

    def __init__(self, user_id: Any, role: str, message: Optional[str] = None):
        super().__init__(
            message or f"{role.capitalize()} with ID {user_id} not found",
            user_id=user_id, role=role,
        )
        self.role = role


class RoleMismatch(StaffNotFound):
    """The user exists but does not hold the role the workflow needs."""
    default_code = 'role_mismatch'

    def __init__(self, user_id: Any, role: str):
        super().__init__(
            user_id, role,
            message=f"User with ID {user_id} does not have role '{role}'",
        )


class AssignmentNotFound(NotFound):
    default_detail = 'Assignment not found'
    default_code = 'assignment_not_found'


class ActiveAssignmentNotFound(NotFound):
    default_detail = 'Active assignment not found'
    default_code = 'active_assignment_not_found'


class DutyNotFound(NotFound):
    default_detail = 'Duty not found'
    default_code = 'duty_not_found'


class NoBedAvailable(ClinicError):
    default_detail = 'No available beds'
    default_code = 'no_bed_available'

    def __init__(self, ward: str):
        super().__init__(f'No available beds in {ward} ward', ward=ward)
        self.ward = ward


class InvalidState(ClinicError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Invalid state for this operation'
    default_code = 'invalid_state'


class PatientAlreadyDischarged(InvalidState):
    default_code = 'already_discharged'

    def __init__(self, patient_id: Any):
        super().__init__(f'Patient {patient_id} is already discharged', patient_id=patient_id)


class PersistenceError(ClinicError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Storage operation failed'
    default_code = 'persistence_error'


def _error_body(message: Any, code: str, detail: Any) -> dict:
    return {'success': False, 'message': message, 'error': {'code': code, 'detail': detail}}


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        logger.exception('storage failure in %s', context.get('view'))
        exc = PersistenceError(str(exc))
    elif isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, ClinicError):
        detail = {k: v for k, v in exc.context.items() if v is not None} or exc.message
        return Response(_error_body(exc.message, exc.default_code, detail), status=exc.status_code)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view'))
        return Response(_error_body('Internal server error', 'server_error', str(exc)), status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    message = detail if isinstance(detail, str) else 'Request failed'
    code = getattr(exc, 'default_code', 'api_error')
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return Response(_error_body(message, code, detail), status=resp.status_code, headers=headers)
