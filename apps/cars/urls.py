from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'cars'

router = DefaultRouter()
router.register(r'', views.CarViewSet, basename='car')

urlpatterns = [
    # GET    /api/cars/                - Cars of all my groups
    # GET    /api/cars/{id}/           - Car details
    # PATCH  /api/cars/{id}/           - Rename / change icon
    # DELETE /api/cars/{id}/           - Remove car
    # POST   /api/cars/{id}/claim/     - Start using the car
    # POST   /api/cars/{id}/park/      - Park at {location: {lat, lng}}
    # POST   /api/cars/{id}/note/      - Overwrite note
    # GET    /api/cars/places/?q=      - Place search
    path('', include(router.urls)),
]
