from django.urls import path

from . import views

app_name = 'parcels'

urlpatterns = [
    path('status/', views.parcel_status, name='status'),
    path('summary/', views.parcel_summary, name='summary'),
    path('catalog/', views.parcel_catalog, name='catalog'),
]
