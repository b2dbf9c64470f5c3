"""
ViewSets DRF para perfis e unidades.
"""
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Profile, Unit
from .permissions import IsAdminRole
from .serializers import ProfileSerializer, UnitSerializer


class UnitViewSet(viewsets.ModelViewSet):
    """Unidades da rede. Escrita restrita a administradores."""
    queryset = Unit.objects.all()
    serializer_class = UnitSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active', 'state']
    search_fields = ['code', 'name', 'city']
    ordering = ['code']

    def get_permissions(self):
        if self.action in ['list', 'retrieve']:
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdminRole()]


class ProfileViewSet(viewsets.ModelViewSet):
    """
    Perfis dos colaboradores.

    A listagem filtrada por papel alimenta, por exemplo, a escolha do
    responsável pela implementação de uma ideia.
    """
    queryset = Profile.objects.select_related('user', 'unit').all()
    serializer_class = ProfileSerializer
    http_method_names = ['get', 'patch', 'head', 'options']
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['role', 'unit', 'is_active']
    search_fields = ['full_name', 'user__username', 'user__email']
    ordering = ['full_name']

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'me']:
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdminRole()]

    @action(detail=False, methods=['get'])
    def me(self, request):
        """Retorna o perfil do usuário logado."""
        profile, _ = Profile.objects.get_or_create(user=request.user)
        return Response(self.get_serializer(profile).data)
