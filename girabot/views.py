"""
ViewSet DRF do GiraBot.
"""
from django.core.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api import error_response

from . import services
from .client import GiraBotError
from .models import AISession
from .serializers import AISessionSerializer, AskSerializer


class AISessionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Conversas do usuário logado com o GiraBot.

    POST /ask/ envia uma pergunta; o histórico fica disponível na listagem.
    """
    serializer_class = AISessionSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['module', 'conversation_id']
    search_fields = ['question', 'answer']
    ordering = ['-created_at']

    def get_queryset(self):
        return AISession.objects.filter(user=self.request.user)

    @action(detail=False, methods=['post'])
    def ask(self, request):
        serializer = AskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            session = services.ask(request.user, **serializer.validated_data)
        except (ValidationError, GiraBotError) as e:
            return error_response(e)
        return Response(
            {'reply': session.answer, 'session': AISessionSerializer(session).data},
            status=status.HTTP_201_CREATED,
        )
