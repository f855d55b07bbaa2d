from rest_framework import serializers


class ScanSerializer(serializers.Serializer):
    payload = serializers.CharField(max_length=2048, trim_whitespace=True)


class ScanAwardSerializer(ScanSerializer):
    points = serializers.IntegerField()


class CameraErrorSerializer(serializers.Serializer):
    error = serializers.CharField(max_length=200)
    user_agent = serializers.CharField(max_length=1024, required=False, allow_blank=True)
