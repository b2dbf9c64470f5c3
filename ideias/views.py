"""
ViewSets DRF do módulo de Ideias.

As ações de workflow (aprovar para votação, curadoria, implementação)
delegam para IdeaService e convertem as exceções em {"error": ...}.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminRole, IsCurador
from core.api import error_response
from girabot.client import GiraBotError

from .models import Idea, IdeaNotification
from .serializers import (
    ApproveForVotingSerializer,
    CurateSerializer,
    IdeaFeedbackSerializer,
    IdeaNotificationSerializer,
    IdeaSerializer,
    IdeaVoteSerializer,
    MarkImplementedSerializer,
    StartImplementationSerializer,
    VoteInputSerializer,
)
from .services import IdeaService

WORKFLOW_ACTIONS = [
    'approve_for_voting', 'detect_duplicates', 'curate', 'start_implementation',
    'mark_implemented', 'stats', 'feedbacks',
]


class IdeaViewSet(mixins.CreateModelMixin, mixins.ListModelMixin, mixins.RetrieveModelMixin,
                  viewsets.GenericViewSet):
    """
    Ideias da rede.

    Qualquer usuário submete, consulta e vota; as ações de curadoria
    exigem admin ou gestor de setor.
    """
    queryset = Idea.objects.select_related(
        'submitted_by__profile', 'implemented_by__profile', 'curator__profile', 'unit'
    ).all()
    serializer_class = IdeaSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'category', 'target_audience', 'unit', 'submitted_by']
    search_fields = ['code', 'title', 'description']
    ordering_fields = ['created_at', 'vote_end', 'total_votes', 'positive_votes']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action in WORKFLOW_ACTIONS:
            return [IsAuthenticated(), IsCurador()]
        if self.action == 'close_expired':
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            idea = IdeaService.submit_idea(request.user, **serializer.validated_data)
        except ValidationError as e:
            return error_response(e)
        return Response(self.get_serializer(idea).data, status=status.HTTP_201_CREATED)

    def _workflow(self, request, input_serializer_class, operation):
        idea = self.get_object()
        serializer = input_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            idea = operation(idea, **serializer.validated_data)
        except (ValidationError, PermissionDenied) as e:
            return error_response(e)
        return Response(self.get_serializer(idea).data)

    @action(detail=True, methods=['post'])
    def vote(self, request, pk=None):
        idea = self.get_object()
        serializer = VoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            vote = IdeaService.cast_vote(idea, request.user, **serializer.validated_data)
        except ValidationError as e:
            return error_response(e)
        idea.refresh_from_db()
        return Response({
            'vote': IdeaVoteSerializer(vote).data,
            'idea': self.get_serializer(idea).data,
        })

    @action(detail=True, methods=['post'])
    def approve_for_voting(self, request, pk=None):
        """Abre a votação (duration_days: 7, 10, 14 ou 21)."""
        return self._workflow(
            request, ApproveForVotingSerializer,
            lambda idea, **data: IdeaService.approve_for_voting(idea, actor=request.user, **data),
        )

    @action(detail=True, methods=['post'])
    def detect_duplicates(self, request, pk=None):
        """Análise consultiva de duplicidade pelo GiraBot (502 se a IA falhar)."""
        idea = self.get_object()
        try:
            result = IdeaService.detect_duplicates(idea)
        except GiraBotError as e:
            return error_response(e)
        return Response(result)

    @action(detail=True, methods=['post'])
    def curate(self, request, pk=None):
        return self._workflow(
            request, CurateSerializer,
            lambda idea, **data: IdeaService.curate(idea, curator=request.user, **data),
        )

    @action(detail=True, methods=['post'])
    def start_implementation(self, request, pk=None):
        return self._workflow(
            request, StartImplementationSerializer,
            lambda idea, **data: IdeaService.start_implementation(idea, actor=request.user, **data),
        )

    @action(detail=True, methods=['post'])
    def mark_implemented(self, request, pk=None):
        return self._workflow(
            request, MarkImplementedSerializer,
            lambda idea, **data: IdeaService.mark_implemented(idea, actor=request.user, **data),
        )

    @action(detail=True, methods=['get'])
    def feedbacks(self, request, pk=None):
        idea = self.get_object()
        return Response(IdeaFeedbackSerializer(idea.feedbacks.select_related('curator__profile'), many=True).data)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(IdeaService.stats())

    @action(detail=False, methods=['post'])
    def close_expired(self, request):
        """Dispara manualmente a apuração das votações vencidas."""
        resultados = IdeaService.close_expired_voting()
        return Response({'processed': len(resultados), 'details': resultados})


class IdeaNotificationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Notificações de ideias do usuário logado."""
    serializer_class = IdeaNotificationSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['is_read', 'idea', 'notification_type']
    ordering = ['-created_at']

    def get_queryset(self):
        return IdeaNotification.objects.select_related('idea').filter(user=self.request.user)

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        notification.mark_as_read()
        return Response(self.get_serializer(notification).data)
