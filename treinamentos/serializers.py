from rest_framework import serializers

from .models import QuizAttempt, QuizQuestion, Training, TrainingCategory


class TrainingCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = TrainingCategory
        fields = ['id', 'name', 'description', 'order', 'is_active']


class QuizQuestionSerializer(serializers.ModelSerializer):
    """Pergunta completa (curadores)."""

    class Meta:
        model = QuizQuestion
        fields = ['id', 'training', 'question', 'options', 'correct_option', 'explanation', 'order']

    def validate(self, attrs):
        options = attrs.get('options', getattr(self.instance, 'options', []))
        correct = attrs.get('correct_option', getattr(self.instance, 'correct_option', None))
        if not isinstance(options, list) or len(options) < 2:
            raise serializers.ValidationError({'options': 'Informe ao menos duas alternativas.'})
        if correct is None or correct >= len(options):
            raise serializers.ValidationError({'correct_option': 'Alternativa correta fora da lista.'})
        return attrs


class QuizQuestionPublicSerializer(serializers.ModelSerializer):
    """Pergunta sem o gabarito, para quem vai responder o quiz."""

    class Meta:
        model = QuizQuestion
        fields = ['id', 'question', 'options', 'order']


class TrainingSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default='')
    questions_count = serializers.IntegerField(source='questions.count', read_only=True)

    class Meta:
        model = Training
        fields = [
            'id', 'title', 'description', 'category', 'category_name', 'content',
            'video_url', 'duration_minutes', 'target_roles', 'is_mandatory',
            'is_active', 'questions_count', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']


class QuizAttemptSerializer(serializers.ModelSerializer):
    training_title = serializers.CharField(source='training.title', read_only=True)

    class Meta:
        model = QuizAttempt
        fields = [
            'id', 'training', 'training_title', 'answers', 'correct_count',
            'total_questions', 'score', 'passed', 'feedback', 'created_at',
        ]
        read_only_fields = fields


class SubmitQuizSerializer(serializers.Serializer):
    answers = serializers.DictField(child=serializers.IntegerField(allow_null=True))
