"""
Django admin registrations for the clinic models.

Care notes and visit logs are shown read-only: they are append-only
records and the admin must not offer to edit them.
"""

from django.contrib import admin

from .models import Assignment, AuditEvent, Bed, CareNote, Duty, Patient, User, VisitLog, Ward


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'is_active', 'is_staff')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'employee_id')


@admin.register(Ward)
class WardAdmin(admin.ModelAdmin):
    list_display = ('name', 'total_beds', 'available_beds', 'occupied_beds', 'occupancy_rate', 'updated_at')
    readonly_fields = ('total_beds', 'available_beds', 'occupied_beds', 'maintenance_beds', 'occupancy_rate')


@admin.register(Bed)
class BedAdmin(admin.ModelAdmin):
    list_display = ('bed_number', 'ward', 'bed_type', 'status', 'occupied_by', 'is_active')
    list_filter = ('ward', 'status', 'bed_type', 'is_active')
    search_fields = ('bed_number',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'ward', 'status', 'assigned_bed', 'admission_date')
    list_filter = ('status', 'ward')
    search_fields = ('first_name', 'last_name', 'phone', 'email')


@admin.register(Duty)
class DutyAdmin(admin.ModelAdmin):
    list_display = ('user', 'ward', 'shift_date', 'shift_start', 'shift_end', 'status')
    list_filter = ('ward', 'status', 'shift_date')


class CareNoteInline(admin.TabularInline):
    model = CareNote
    extra = 0
    can_delete = False
    readonly_fields = ('nurse', 'note', 'temperature', 'blood_pressure', 'heart_rate', 'oxygen_level', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


class VisitLogInline(admin.TabularInline):
    model = VisitLog
    extra = 0
    can_delete = False
    readonly_fields = ('visited_by', 'role', 'note', 'created_at')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'nurse', 'status', 'assigned_at')
    list_filter = ('status',)
    search_fields = ('patient__first_name', 'patient__last_name')
    inlines = [CareNoteInline, VisitLogInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('action',)
