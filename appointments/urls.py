from django.urls import path

from .views import (
    AppointmentListCreateView,
    AppointmentDetailView,
    AppointmentConfirmView,
    AppointmentCompleteView,
)

app_name = 'appointments'

urlpatterns = [
    path('', AppointmentListCreateView.as_view(), name='appointment-list'),
    path('<uuid:appointment_id>/', AppointmentDetailView.as_view(), name='appointment-detail'),
    path('<uuid:appointment_id>/confirm/', AppointmentConfirmView.as_view(), name='appointment-confirm'),
    path('<uuid:appointment_id>/complete/', AppointmentCompleteView.as_view(), name='appointment-complete'),
]
