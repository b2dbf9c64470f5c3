from django.contrib import admin

from .models import FeedPost, FeedPostComment


class FeedPostCommentInline(admin.TabularInline):
    model = FeedPostComment
    extra = 0
    readonly_fields = ['user', 'content', 'created_at']


@admin.register(FeedPost)
class FeedPostAdmin(admin.ModelAdmin):
    list_display = ['title', 'post_type', 'pinned', 'likes_count', 'comments_count', 'created_at']
    list_filter = ['post_type', 'pinned', 'source_type']
    search_fields = ['title', 'description', 'mirror_key']
    readonly_fields = ['mirror_key', 'source_type', 'source_id', 'likes_count', 'comments_count', 'created_at']
    inlines = [FeedPostCommentInline]
