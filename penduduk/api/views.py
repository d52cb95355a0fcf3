from rest_framework import status
from rest_framework.permissions import BasePermission, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from penduduk.api.serializers import PendudukSerializer
from penduduk.exceptions import PendudukNotFound
from penduduk.services.penduduk_service import PendudukService


class IsPendudukAdmin(BasePermission):
    def has_permission(self, request, view):
        return getattr(request.user, "is_admin", False)


class PendudukRetrieveView(APIView):
    """
    API endpoint returning one penduduk with its account and registration date.

    GET /admin/penduduk/{id}/
    """

    permission_classes = [IsAuthenticated, IsPendudukAdmin]

    def get(self, request, pk):
        """Retrieve a penduduk record."""
        try:
            penduduk = PendudukService().get_penduduk(pk)
        except PendudukNotFound:
            return Response({"message": "Penduduk not found"}, status=status.HTTP_404_NOT_FOUND)

        return Response(PendudukSerializer(penduduk).data, status=status.HTTP_200_OK)
