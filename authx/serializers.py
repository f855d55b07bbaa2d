from rest_framework import serializers
from rest_framework.exceptions import NotFound

from core.constants import PASSWORD_MIN_LENGTH
from users import services as user_services


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    nickname = serializers.CharField(max_length=100)
    password = serializers.CharField(write_only=True, min_length=PASSWORD_MIN_LENGTH)

    def validate(self, attrs):
        for name in ("first_name", "last_name", "nickname"):
            attrs[name] = attrs[name].strip()
            if not attrs[name]:
                raise serializers.ValidationError({name: "This field is required."})

        if user_services.find_by_name_pair(attrs["first_name"], attrs["last_name"]).exists():
            raise serializers.ValidationError(
                {"non_field_errors": ["A user with this name already exists."]},
                code="duplicate",
            )
        return attrs

    def create(self, validated_data):
        return user_services.create_student(**validated_data)


class LoginSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        first_name = attrs["first_name"].strip()
        last_name = attrs["last_name"].strip()
        if not first_name or not last_name:
            raise serializers.ValidationError("First and last name are required.")

        candidates = list(user_services.find_by_name_pair(first_name, last_name))
        if not candidates:
            raise NotFound("User not found")

        user = next(
            (candidate for candidate in candidates if candidate.check_password(attrs["password"])),
            None,
        )
        if user is None or not user.is_active:
            raise serializers.ValidationError("Incorrect password")

        attrs["user"] = user
        return attrs
