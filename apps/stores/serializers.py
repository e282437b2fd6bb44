from rest_framework import serializers

from .models import Store


class StoreInputSerializer(serializers.Serializer):
    """Store profile submitted at onboarding and on every edit."""

    name = serializers.CharField(max_length=100)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    logo_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    website = serializers.URLField(max_length=255, required=False, allow_blank=True, default='')


class StoreSerializer(serializers.ModelSerializer):
    """Store profile."""

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'address',
            'email',
            'phone',
            'logo_url',
            'website',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
