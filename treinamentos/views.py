"""
ViewSets DRF de Treinamentos.
"""
from django.core.exceptions import ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsCurador, IsCuradorOrReadOnly
from accounts.roles import is_curador
from core.api import error_response

from .models import QuizAttempt, QuizQuestion, Training, TrainingCategory
from .serializers import (
    QuizAttemptSerializer,
    QuizQuestionPublicSerializer,
    QuizQuestionSerializer,
    SubmitQuizSerializer,
    TrainingCategorySerializer,
    TrainingSerializer,
)
from .services import QuizService


class TrainingCategoryViewSet(viewsets.ModelViewSet):
    queryset = TrainingCategory.objects.all()
    serializer_class = TrainingCategorySerializer
    permission_classes = [IsAuthenticated, IsCuradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name']
    ordering = ['order', 'name']


class TrainingViewSet(viewsets.ModelViewSet):
    """
    Treinamentos.

    GET quiz/ traz as perguntas sem gabarito; POST submit_quiz/ corrige.
    """
    serializer_class = TrainingSerializer
    permission_classes = [IsAuthenticated, IsCuradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'is_mandatory', 'is_active']
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'title']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = Training.objects.select_related('category')
        if not is_curador(self.request.user):
            queryset = queryset.filter(is_active=True)
        return queryset

    def get_permissions(self):
        if self.action in ['quiz', 'submit_quiz']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    @action(detail=True, methods=['get'])
    def quiz(self, request, pk=None):
        training = self.get_object()
        return Response(QuizQuestionPublicSerializer(training.questions.all(), many=True).data)

    @action(detail=True, methods=['post'])
    def submit_quiz(self, request, pk=None):
        training = self.get_object()
        serializer = SubmitQuizSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            attempt = QuizService.submit_attempt(request.user, training, serializer.validated_data['answers'])
        except ValidationError as e:
            return error_response(e)
        return Response(QuizAttemptSerializer(attempt).data, status=status.HTTP_201_CREATED)


class QuizQuestionViewSet(viewsets.ModelViewSet):
    """Cadastro de perguntas (curadores)."""
    queryset = QuizQuestion.objects.select_related('training').all()
    serializer_class = QuizQuestionSerializer
    permission_classes = [IsAuthenticated, IsCurador]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['training']
    ordering = ['training', 'order', 'id']


class QuizAttemptViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Tentativas do usuário logado (curadores veem todas)."""
    serializer_class = QuizAttemptSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['training', 'passed']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = QuizAttempt.objects.select_related('training')
        if is_curador(self.request.user):
            return queryset
        return queryset.filter(user=self.request.user)
