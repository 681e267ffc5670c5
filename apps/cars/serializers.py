from rest_framework import serializers
from .models import Car


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(min_value=-90, max_value=90)
    lng = serializers.FloatField(min_value=-180, max_value=180)


class CarSerializer(serializers.ModelSerializer):
    """
    Car as the clients display it.

    location is null until the car is parked for the first time, and
    currentlyUsedById is an empty string while nobody uses the car.
    """

    location = serializers.SerializerMethodField()
    groupId = serializers.UUIDField(source='group_id', read_only=True)
    groupName = serializers.CharField(source='group.name', read_only=True)
    currentlyInUse = serializers.BooleanField(source='currently_in_use', read_only=True)
    currentlyUsedById = serializers.SerializerMethodField()
    currentlyUsedByFullName = serializers.CharField(source='currently_used_by_full_name', read_only=True)

    class Meta:
        model = Car
        fields = [
            'id',
            'name',
            'icon',
            'location',
            'address',
            'note',
            'groupId',
            'groupName',
            'currentlyInUse',
            'currentlyUsedById',
            'currentlyUsedByFullName',
        ]
        read_only_fields = fields

    def get_location(self, obj):
        if not obj.is_parked:
            return None
        return {'lat': obj.latitude, 'lng': obj.longitude}

    def get_currentlyUsedById(self, obj):
        return str(obj.currently_used_by_id) if obj.currently_used_by_id else ''


class CarCreateSerializer(serializers.Serializer):
    name = serializers.CharField(required=True, max_length=200)
    icon = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)


class CarUpdateSerializer(serializers.Serializer):
    """Fields a member may edit directly."""

    name = serializers.CharField(required=False, max_length=200)
    icon = serializers.CharField(required=False, allow_blank=True, max_length=100)


class CarNoteSerializer(serializers.Serializer):
    note = serializers.CharField(required=True, allow_blank=True)


class ParkCarSerializer(serializers.Serializer):
    location = LocationSerializer(required=True)


class PlaceCandidateSerializer(serializers.Serializer):
    name = serializers.CharField()
    address = serializers.CharField()
    location = serializers.SerializerMethodField()

    def get_location(self, obj):
        return {'lat': obj.latitude, 'lng': obj.longitude}
