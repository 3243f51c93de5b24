"""
URL mappings for the care facility API.

All endpoints live under ``/api/`` without trailing slashes, matching the
paths the frontend calls.
"""
from django.urls import path

from .views import health
from .views.auth import login_view, logout_view, refresh_view
from .views.records import record_detail, records_list
from .views.reference import activity_types, dashboard_stats, donation_categories
from .views.residents import resident_assign_room, resident_detail, residents_list
from .views.rooms import room_detail, rooms_available, rooms_list, rooms_occupancy_report
from .views.transactions import financial_summary, transaction_detail, transactions_list
from .views.users import user_detail, user_password, users_list

urlpatterns = [
    path('healthz', health.healthz, name='healthz'),

    # Auth
    path('api/login', login_view, name='login_view'),
    path('api/auth/refresh', refresh_view, name='refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),

    # Residents
    path('api/residents', residents_list, name='residents_list'),
    path('api/residents/<int:pk>', resident_detail, name='resident_detail'),
    path('api/residents/<int:pk>/assign-room', resident_assign_room, name='resident_assign_room'),

    # Rooms
    path('api/rooms', rooms_list, name='rooms_list'),
    path('api/rooms/available', rooms_available, name='rooms_available'),
    path('api/rooms/occupancy-report', rooms_occupancy_report, name='rooms_occupancy_report'),
    path('api/rooms/<int:pk>', room_detail, name='room_detail'),

    # Daily records
    path('api/records', records_list, name='records_list'),
    path('api/records/<int:pk>', record_detail, name='record_detail'),

    # Ledger
    path('api/transactions', transactions_list, name='transactions_list'),
    path('api/transactions/<int:pk>', transaction_detail, name='transaction_detail'),
    path('api/financial-summary', financial_summary, name='financial_summary'),

    # Users
    path('api/users', users_list, name='users_list'),
    path('api/users/<int:pk>', user_detail, name='user_detail'),
    path('api/users/<int:pk>/password', user_password, name='user_password'),

    # Reference data & dashboard
    path('api/activity-types', activity_types, name='activity_types'),
    path('api/donation-categories', donation_categories, name='donation_categories'),
    path('api/dashboard-stats', dashboard_stats, name='dashboard_stats'),
]
