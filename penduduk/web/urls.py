from django.urls import path
from penduduk.web.views import PendudukDetailView, PendudukListView

urlpatterns = [
    path("penduduk/", PendudukListView.as_view(), name="penduduk-list"),
    path("penduduk/<int:pk>/", PendudukDetailView.as_view(), name="penduduk-detail"),
]
