from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Car
from .permissions import IsCarGroupMember
from .serializers import (
    CarSerializer,
    CarUpdateSerializer,
    CarNoteSerializer,
    ParkCarSerializer,
    PlaceCandidateSerializer,
)

from apps.cars.services import (
    get_cars_for_user,
    update_car_details,
    update_car_note,
    mark_car_as_used,
    update_car_location,
    delete_car,
    search_places,
    # Exceptions
    CarNotFoundError,
    CarValidationError,
    GeocodingError,
)
from apps.groups.services import NotMemberError


class CarViewSet(mixins.ListModelMixin,
                 mixins.RetrieveModelMixin,
                 mixins.UpdateModelMixin,
                 mixins.DestroyModelMixin,
                 viewsets.GenericViewSet):
    """
    ViewSet for cars.

    list: Cars of every group the user belongs to
    retrieve: Get a specific car (group members only)
    partial_update: Rename a car or change its icon
    destroy: Remove a car from its group
    claim: Mark the car as used by the current user
    park: Store a new parking location and release the car
    note: Overwrite the car's note
    places: Search places to park at
    """

    serializer_class = CarSerializer
    permission_classes = [IsAuthenticated, IsCarGroupMember]
    pagination_class = None
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    queryset = Car.objects.select_related('group', 'currently_used_by')

    def list(self, request, *args, **kwargs):
        cars = get_cars_for_user(user=request.user)
        return Response(CarSerializer(cars, many=True).data)

    @extend_schema(request=CarUpdateSerializer, responses={200: CarSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Rename a car or change its icon."""
        car = self.get_object()
        serializer = CarUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            car = update_car_details(car_id=car.id, **serializer.validated_data)
        except CarValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CarSerializer(car).data)

    def destroy(self, request, *args, **kwargs):
        """Remove the car from its group."""
        car = self.get_object()

        try:
            delete_car(group_id=car.group_id, car_id=car.id)
        except CarNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: CarSerializer})
    @action(detail=True, methods=['post'])
    def claim(self, request, pk=None):
        """Start using the car. An existing claim by someone else is replaced."""
        car = self.get_object()

        try:
            car = mark_car_as_used(car_id=car.id, user=request.user)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(CarSerializer(car).data)

    @extend_schema(request=ParkCarSerializer, responses={200: CarSerializer})
    @action(detail=True, methods=['post'])
    def park(self, request, pk=None):
        """Park the car at a location; the address is resolved when possible."""
        car = self.get_object()
        serializer = ParkCarSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        location = serializer.validated_data['location']

        try:
            car = update_car_location(
                car_id=car.id,
                latitude=location['lat'],
                longitude=location['lng'],
                user=request.user,
            )
        except CarValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(CarSerializer(car).data)

    @extend_schema(request=CarNoteSerializer, responses={200: CarSerializer})
    @action(detail=True, methods=['post'])
    def note(self, request, pk=None):
        """Overwrite the note of the car."""
        car = self.get_object()
        serializer = CarNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        car = update_car_note(car_id=car.id, note=serializer.validated_data['note'])
        return Response(CarSerializer(car).data)

    @extend_schema(
        parameters=[OpenApiParameter('q', str, description='Free-text place query')],
        responses={200: PlaceCandidateSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def places(self, request):
        """Search places matching ?q=."""
        query = request.query_params.get('q', '')

        try:
            places = search_places(query)
        except GeocodingError as e:
            return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(PlaceCandidateSerializer(places, many=True).data)
