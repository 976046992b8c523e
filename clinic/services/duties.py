from clinic.choices import DutyStatus
from clinic.exceptions import DutyNotFound, ValidationError
from clinic.models import Duty
from clinic.services.audit import log_action


def list_duties(user):
    return Duty.objects.filter(user=user).order_by('-shift_date', '-shift_start', '-id')


def update_duty_status(user, duty_id, status: str) -> Duty:
    """Move one of the caller's own shifts to ``status``."""
    if status not in DutyStatus.values:
        raise ValidationError('Invalid duty status', field='status', allowed=list(DutyStatus.values))
    duty = Duty.objects.filter(pk=duty_id, user=user).first()
    if duty is None:
        raise DutyNotFound(f'Duty {duty_id} not found', duty_id=duty_id)
    duty.status = status
    duty.save(update_fields=['status', 'updated_at'])
    log_action(user=user, action='duty_status', object_type='duty', object_id=duty.id, detail={'status': status})
    return duty
