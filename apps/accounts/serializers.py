from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """User profile in the shape clients know: userId, userEmail, names, groups."""

    userId = serializers.UUIDField(source='id', read_only=True)
    userEmail = serializers.EmailField(source='email', read_only=True)
    firstName = serializers.CharField(source='first_name', required=False, allow_blank=True, max_length=100)
    lastName = serializers.CharField(source='last_name', required=False, allow_blank=True, max_length=100)
    groups = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['userId', 'userEmail', 'firstName', 'lastName', 'groups']

    def get_groups(self, obj):
        return [
            str(group_id)
            for group_id in obj.group_memberships.values_list('group_id', flat=True)
        ]


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    firstName = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    lastName = serializers.CharField(required=False, allow_blank=True, default='', max_length=100)
    fcmToken = serializers.CharField(required=False, allow_blank=True, default='', max_length=512)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    fcmToken = serializers.CharField(required=False, allow_blank=True, max_length=512)


class SessionSerializer(serializers.Serializer):
    """Details of the logged-in user as the session directory reports them."""

    userId = serializers.CharField(source='user_id')
    userEmail = serializers.EmailField(source='user_email')
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')


class DeviceTokenSerializer(serializers.Serializer):
    fcmToken = serializers.CharField(required=True, allow_blank=True, max_length=512)


class PasswordResetRequestSerializer(serializers.Serializer):
    """Serializer for password reset request."""

    email = serializers.EmailField(required=True)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs


class DeleteAccountSerializer(serializers.Serializer):
    password = serializers.CharField(
        required=False,
        allow_blank=True,
        style={'input_type': 'password'},
        help_text="Current password, required when the last login is older than a few minutes",
    )
    confirm = serializers.BooleanField(help_text="Must be true to confirm deletion")


class UserPublicSerializer(serializers.ModelSerializer):
    """Member info shown inside a group."""

    userId = serializers.UUIDField(source='id', read_only=True)
    userEmail = serializers.EmailField(source='email', read_only=True)
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)

    class Meta:
        model = User
        fields = ['userId', 'userEmail', 'firstName', 'lastName']
        read_only_fields = fields
