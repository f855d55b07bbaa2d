from rest_framework import serializers

from .models import Activity, Completion


class ActivitySerializer(serializers.ModelSerializer):
    completed = serializers.SerializerMethodField()

    class Meta:
        model = Activity
        fields = [
            "id",
            "name",
            "description",
            "points",
            "date",
            "time",
            "created_by",
            "created_at",
            "completed",
        ]
        read_only_fields = ["id", "created_by", "created_at", "completed"]

    def get_completed(self, obj):
        completed_ids = self.context.get("completed_ids")
        if completed_ids is None:
            return None
        return obj.id in completed_ids

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Activity name is required.")
        return value.strip()


class CompletionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Completion
        fields = ["id", "activity", "activity_name", "points_earned", "completed_at"]
        read_only_fields = fields
