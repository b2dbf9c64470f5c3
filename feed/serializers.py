from rest_framework import serializers

from accounts.serializers import UserSerializer

from .models import FeedPost, FeedPostComment


class FeedPostSerializer(serializers.ModelSerializer):
    created_by = UserSerializer(read_only=True)
    post_type_display = serializers.CharField(source='get_post_type_display', read_only=True)

    class Meta:
        model = FeedPost
        fields = [
            'id', 'post_type', 'post_type_display', 'title', 'description',
            'module_link', 'reference_id', 'source_type', 'source_id',
            'created_by', 'media_url', 'pinned', 'likes_count',
            'comments_count', 'created_at',
        ]
        read_only_fields = [
            'id', 'post_type', 'module_link', 'reference_id', 'source_type',
            'source_id', 'created_by', 'likes_count', 'comments_count', 'created_at',
        ]


class FeedPostCommentSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = FeedPostComment
        fields = ['id', 'post', 'user', 'content', 'created_at']
        read_only_fields = ['id', 'post', 'user', 'created_at']
