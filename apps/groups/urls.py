from django.urls import path, include
from rest_framework.routers import DefaultRouter, SimpleRouter
from . import views

app_name = 'groups'

# Invitations must be routed before the group detail routes
invitation_router = SimpleRouter()
invitation_router.register(r'invitations', views.InvitationViewSet, basename='invitation')

router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Invitation routes
    # GET    /api/groups/invitations/                - Invitations for my email
    # POST   /api/groups/invitations/{id}/accept/    - Accept invitation
    # DELETE /api/groups/invitations/{id}/           - Decline invitation
    path('', include(invitation_router.urls)),

    # Group ViewSet routes
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group details
    # DELETE /api/groups/{id}/         - Delete group with its cars

    # Custom group actions
    # GET    /api/groups/{id}/members/          - List members
    # POST   /api/groups/{id}/invite/           - Invite by email
    # POST   /api/groups/{id}/leave/            - Leave group
    # DELETE /api/groups/{id}/remove_member/    - Remove member
    # GET    /api/groups/{id}/cars/             - List the group's cars
    # POST   /api/groups/{id}/add_car/          - Add a car
    path('', include(router.urls)),
]
