from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Camp, CampKid

User = get_user_model()


class CampSerializer(serializers.ModelSerializer):
    mentor_ids = serializers.PrimaryKeyRelatedField(
        source="mentors",
        many=True,
        read_only=True,
    )
    kids_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Camp
        fields = ["id", "name", "mentor_ids", "kids_count", "created_by", "created_at"]
        read_only_fields = fields


class CampCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    mentor_ids = serializers.ListField(
        child=serializers.IntegerField(),
        required=False,
        default=list,
    )

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Camp name is required.")
        return value.strip()

    def validate_mentor_ids(self, value):
        ids = list(dict.fromkeys(value))
        found = set(User.objects.filter(pk__in=ids).values_list("id", flat=True))
        missing = [pk for pk in ids if pk not in found]
        if missing:
            raise serializers.ValidationError(f"Unknown mentor id(s): {missing}")
        return ids


class CampKidSerializer(serializers.ModelSerializer):
    class Meta:
        model = CampKid
        fields = [
            "id",
            "camp",
            "nickname",
            "first_name",
            "last_name",
            "group_number",
            "points",
            "created_at",
        ]
        read_only_fields = ["id", "camp", "points", "created_at"]

    def validate(self, attrs):
        for name in ("nickname", "first_name", "last_name"):
            if not (attrs.get(name) or "").strip():
                raise serializers.ValidationError({name: "This field is required."})
        return attrs


class PointsDeltaSerializer(serializers.Serializer):
    """Signed delta; presets (+5/+10/+20/-5) and custom values alike."""
    delta = serializers.IntegerField()
