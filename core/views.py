"""
ViewSets DRF para notificações e configurações do portal.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminRole, IsCurador

from .api import error_response
from .models import Notification, Setting
from .serializers import BroadcastSerializer, NotificationSerializer, SettingSerializer
from .services import NotificationService


class NotificationViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Notificações do usuário logado.

    Cada usuário só enxerga as próprias notificações.
    """
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_read', 'notification_type']
    search_fields = ['title', 'message']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        return Notification.objects.filter(user=self.request.user)

    def get_permissions(self):
        if self.action == 'send':
            return [IsAuthenticated(), IsCurador()]
        return super().get_permissions()

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        notification.mark_as_read()
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        updated = NotificationService.mark_all_read(request.user)
        return Response({'updated': updated})

    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        count = self.get_queryset().filter(is_read=False).count()
        return Response({'unread': count})

    @action(detail=False, methods=['post'])
    def send(self, request):
        """Comunicado para usuários, papéis ou unidades (com WhatsApp opcional)."""
        serializer = BroadcastSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = NotificationService.broadcast(sender=request.user, **serializer.validated_data)
        except (ValidationError, PermissionDenied) as e:
            return error_response(e)
        return Response(result, status=status.HTTP_201_CREATED)


class SettingViewSet(viewsets.ModelViewSet):
    """Configurações de negócio (somente administradores)."""
    queryset = Setting.objects.all()
    serializer_class = SettingSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    lookup_field = 'key'
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['key', 'description']
    ordering = ['key']
