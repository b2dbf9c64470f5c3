"""
ViewSets DRF do Mural.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminRole, IsCurador, IsCuradorOrReadOnly
from accounts.roles import is_curador
from core.api import error_response

from .models import MuralCategory, MuralPost, MuralResponse, MuralSetting, MuralStatus
from .serializers import (
    ModerationSerializer,
    MuralCategorySerializer,
    MuralPostSerializer,
    MuralResponseSerializer,
    MuralSettingSerializer,
)
from .services import MuralService


class MuralCategoryViewSet(viewsets.ModelViewSet):
    serializer_class = MuralCategorySerializer
    permission_classes = [IsAuthenticated, IsCuradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['name', 'key']
    ordering = ['order', 'name']

    def get_queryset(self):
        queryset = MuralCategory.objects.all()
        if not is_curador(self.request.user):
            queryset = queryset.filter(is_active=True)
        return queryset


class MuralPostViewSet(mixins.CreateModelMixin, mixins.ListModelMixin, mixins.RetrieveModelMixin,
                       viewsets.GenericViewSet):
    """
    Postagens do Mural.

    Colaboradores veem as aprovadas e as próprias; moderadores veem todas
    e usam a ação `moderate`.
    """
    serializer_class = MuralPostSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'category', 'approval_source']
    search_fields = ['content']
    ordering_fields = ['created_at', 'response_count']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = MuralPost.objects.select_related('category')
        if is_curador(self.request.user):
            return queryset
        return queryset.filter(Q(status=MuralStatus.APPROVED) | Q(author=self.request.user))

    def get_permissions(self):
        if self.action == 'moderate':
            return [IsAuthenticated(), IsCurador()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            post = MuralService.submit_post(
                request.user, data['category'], data['content'], image=data.get('image'),
            )
        except ValidationError as e:
            return error_response(e)
        return Response(self.get_serializer(post).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def moderate(self, request, pk=None):
        post = self.get_object()
        serializer = ModerationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            post = MuralService.moderate_post(post, serializer.validated_data['decision'], request.user)
        except (ValidationError, PermissionDenied) as e:
            return error_response(e)
        return Response(self.get_serializer(post).data)

    @action(detail=True, methods=['get', 'post'])
    def responses(self, request, pk=None):
        post = self.get_object()
        if request.method == 'GET':
            responses = post.responses.all()
            if not is_curador(request.user):
                responses = responses.filter(Q(status=MuralStatus.APPROVED) | Q(responder=request.user))
            serializer = MuralResponseSerializer(responses, many=True, context=self.get_serializer_context())
            return Response(serializer.data)

        serializer = MuralResponseSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        try:
            response = MuralService.submit_response(request.user, post, serializer.validated_data['content'])
        except ValidationError as e:
            return error_response(e)
        return Response(
            MuralResponseSerializer(response, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )


class MuralResponseViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Fila de respostas para os moderadores."""
    queryset = MuralResponse.objects.select_related('post').all()
    serializer_class = MuralResponseSerializer
    permission_classes = [IsAuthenticated, IsCurador]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['status', 'post']
    ordering = ['created_at']

    @action(detail=True, methods=['post'])
    def moderate(self, request, pk=None):
        response = self.get_object()
        serializer = ModerationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            response = MuralService.moderate_response(
                response, serializer.validated_data['decision'], request.user
            )
        except (ValidationError, PermissionDenied) as e:
            return error_response(e)
        return Response(self.get_serializer(response).data)


class MuralSettingViewSet(viewsets.ModelViewSet):
    queryset = MuralSetting.objects.all()
    serializer_class = MuralSettingSerializer
    permission_classes = [IsAuthenticated, IsAdminRole]
    lookup_field = 'key'
    filter_backends = [filters.SearchFilter]
    search_fields = ['key']
