"""
ViewSets DRF do Feed.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsCuradorOrReadOnly
from core.api import error_response

from .models import FeedPost
from .serializers import FeedPostCommentSerializer, FeedPostSerializer
from .services import FeedService


class FeedPostViewSet(viewsets.ModelViewSet):
    """
    Posts do Feed, fixados primeiro.

    Leitura, comentários e curtidas para qualquer usuário; criar, editar
    e remover comunicados só para curadores.
    """
    queryset = FeedPost.objects.select_related('created_by__profile').all()
    serializer_class = FeedPostSerializer
    permission_classes = [IsAuthenticated, IsCuradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['post_type', 'pinned', 'source_type']
    search_fields = ['title', 'description']
    ordering_fields = ['created_at', 'likes_count', 'comments_count']
    ordering = ['-pinned', '-created_at']

    def get_permissions(self):
        if self.action in ['comments', 'like']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            post = FeedService.create_announcement(author=request.user, **serializer.validated_data)
        except (ValidationError, PermissionDenied) as e:
            return error_response(e)
        return Response(self.get_serializer(post).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        post = self.get_object()
        if request.method == 'GET':
            comments = post.comments.select_related('user__profile')
            return Response(FeedPostCommentSerializer(comments, many=True).data)
        try:
            comment = FeedService.add_comment(post, request.user, request.data.get('content'))
        except ValidationError as e:
            return error_response(e)
        return Response(FeedPostCommentSerializer(comment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def like(self, request, pk=None):
        liked, likes_count = FeedService.toggle_like(self.get_object(), request.user)
        return Response({'liked': liked, 'likes_count': likes_count})
