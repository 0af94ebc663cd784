from django.urls import path

from .views import (
    VeterinarianListView,
    VeterinarianDetailView,
    VeterinarianFacetsView,
)

urlpatterns = [
    path('', VeterinarianListView.as_view(), name='veterinarian-list'),
    path('facets/', VeterinarianFacetsView.as_view(), name='veterinarian-facets'),
    path('<uuid:vet_id>/', VeterinarianDetailView.as_view(), name='veterinarian-detail'),
]
