from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'first_name',
            'last_name',
            'nickname',
            'display_name',
            'student_id',
            'role',
            'points',
            'camp_mentor',
            'camp_id',
            'date_joined',
            'last_login',
        ]
        read_only_fields = fields


class StudentSerializer(serializers.ModelSerializer):
    """Admin-side listing row."""
    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'nickname', 'student_id', 'points', 'camp_mentor', 'camp_id']
        read_only_fields = fields


class PointsAdjustSerializer(serializers.Serializer):
    delta = serializers.IntegerField()
