from django.urls import path

from .views import (
    AlertHistoryView,
    BroadcastAlertView,
    SendBroadcastAlertView,
    SendIndividualAlertView,
)

urlpatterns = [
    path('broadcast/', BroadcastAlertView.as_view(), name='admin-broadcast'),
    path('send-broadcast-alert/', SendBroadcastAlertView.as_view(), name='admin-send-broadcast-alert'),
    path('send-individual-alert/', SendIndividualAlertView.as_view(), name='admin-send-individual-alert'),
    path('alerts/', AlertHistoryView.as_view(), name='admin-alert-history'),
    path('alert-history/', AlertHistoryView.as_view(), name='admin-alert-history-legacy'),
]
