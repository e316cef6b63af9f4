from django.urls import path

from . import views

app_name = 'reservations'

urlpatterns = [
    path('reserve/', views.reserve, name='reserve'),

    # Admin dashboard
    path('admin/reservations/', views.admin_reservations, name='admin-reservations'),
    path('admin/reservations.csv', views.admin_reservations_csv, name='admin-reservations-csv'),
    path('admin/confirm/', views.admin_confirm, name='admin-confirm'),
    path('admin/cancel/', views.admin_cancel, name='admin-cancel'),
    path('admin/expire/', views.admin_expire, name='admin-expire'),
]
