from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import QuizAttemptViewSet, QuizQuestionViewSet, TrainingCategoryViewSet, TrainingViewSet

router = DefaultRouter()
router.register(r'categories', TrainingCategoryViewSet, basename='training-category')
router.register(r'trainings', TrainingViewSet, basename='training')
router.register(r'questions', QuizQuestionViewSet, basename='quiz-question')
router.register(r'attempts', QuizAttemptViewSet, basename='quiz-attempt')

urlpatterns = [
    path('', include(router.urls)),
]
