"""
URL mappings for the MediVibe API.

Paths follow the dashboards' API client: one prefix per role plus the
public bed board.  No trailing slashes (``APPEND_SLASH`` is off).
"""
from django.urls import include, path

from .auth_views import jwt_logout_view, jwt_refresh_view, login_view, me_view
from .views import admin, beds, doctor, health, nurse, reception

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout_view'),
    path('api/auth/me', me_view, name='me_view'),

    # admin
    path('api/admin/users', admin.users),
    path('api/admin/users/<int:user_id>/status', admin.user_status),
    path('api/admin/patients', admin.patients),
    path('api/admin/patients/<int:patient_id>/discharge', admin.discharge),
    path('api/admin/assignments', admin.assign_patient),
    path('api/admin/beds', admin.bed_list),
    path('api/admin/beds/<int:bed_id>/status', admin.bed_status),
    path('api/admin/reports/summary', admin.report_summary),
    path('api/admin/reports/generate', admin.report_generate),

    # public bed board
    path('api/beds', beds.bed_list),
    path('api/beds/ward/<str:ward>', beds.beds_by_ward),
    path('api/beds/availability/summary', beds.availability_summary),
    path('api/beds/details/all', beds.bed_details),
    path('api/beds/<int:bed_id>/status', beds.bed_status),

    # doctor
    path('api/doctor/duties', doctor.duty_list),
    path('api/doctor/duties/<int:duty_id>/status', doctor.duty_status),
    path('api/doctor/patients', doctor.patient_list),
    path('api/doctor/patients/<int:patient_id>', doctor.patient_detail),
    path('api/doctor/patients/<int:patient_id>/visit', doctor.mark_visited),
    path('api/doctor/assignments/<int:assignment_id>/notes', doctor.assignment_notes),
    path('api/doctor/beds/availability', doctor.bed_availability),

    # nurse
    path('api/nurse/duties', nurse.duty_list),
    path('api/nurse/duties/<int:duty_id>/status', nurse.duty_status),
    path('api/nurse/patients', nurse.patient_list),
    path('api/nurse/patients/<int:patient_id>', nurse.patient_detail),
    path('api/nurse/patients/<int:patient_id>/visit', nurse.mark_visited),
    path('api/nurse/assignments/<int:assignment_id>/care-notes', nurse.add_care_note),
    path('api/nurse/beds/<int:bed_id>/status', nurse.bed_status),

    # front desk
    path('api/receptionist/patients/admit', reception.admit),
    path('api/receptionist/patients', reception.patient_list),
    path('api/receptionist/patients/<int:patient_id>/discharge', reception.discharge),
    path('api/receptionist/beds/availability', reception.bed_availability),
]
