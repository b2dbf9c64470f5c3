from django.contrib import admin

from .models import QuizAttempt, QuizQuestion, Training, TrainingCategory


class QuizQuestionInline(admin.StackedInline):
    model = QuizQuestion
    extra = 0


@admin.register(TrainingCategory)
class TrainingCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'order', 'is_active']
    search_fields = ['name']


@admin.register(Training)
class TrainingAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'is_mandatory', 'is_active', 'created_at']
    list_filter = ['category', 'is_mandatory', 'is_active']
    search_fields = ['title', 'description']
    inlines = [QuizQuestionInline]


@admin.register(QuizAttempt)
class QuizAttemptAdmin(admin.ModelAdmin):
    list_display = ['user', 'training', 'score', 'passed', 'created_at']
    list_filter = ['passed', 'training']
    search_fields = ['user__username', 'training__title']
    readonly_fields = ['answers', 'feedback', 'created_at']
