from rest_framework import serializers

from intelligence.constants import QuestionType


class AnswerSerializer(serializers.Serializer):
    question_id = serializers.CharField(max_length=64)
    question_type = serializers.ChoiceField(
        choices=QuestionType.choices, required=False, allow_blank=True
    )
    payload = serializers.JSONField()
    answered_at = serializers.DateTimeField(required=False)


class CatalogQuestionSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    type = serializers.ChoiceField(choices=QuestionType.choices)
    prompt = serializers.CharField(required=False, allow_blank=True, default="")
    order = serializers.IntegerField(required=False, min_value=1)
    schema = serializers.JSONField(required=False, default=dict)

    def validate_schema(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Schema must be a JSON object.")
        return value
