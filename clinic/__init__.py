"""MediVibe clinic application.

This package holds the models, services, serializers, views and route
registrations behind the role dashboards (admin, doctor, nurse, front
desk) and the public bed-availability board.
"""
