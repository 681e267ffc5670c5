import pytest
from unittest.mock import Mock, patch
from firebase_admin.exceptions import InvalidArgumentError, UnavailableError

from apps.accounts.models import User
from apps.notifications.services import (
    send_push_notification,
    notify_invitation,
    NotificationDeliveryError,
)
from apps.notifications.services.push_dispatch import get_firebase_app

DISPATCH = 'apps.notifications.services.push_dispatch'


@pytest.fixture
def firebase_app():
    """Pretend push is configured and capture what would be sent."""
    app = Mock()
    with patch(f'{DISPATCH}.get_firebase_app', return_value=app), \
            patch(f'{DISPATCH}.messaging.send', return_value='projects/tagauto/messages/1') as send:
        yield app, send


@pytest.fixture
def invitee(db):
    return User.objects.create_user(
        email='invitee@example.com',
        password='InviteePass123!',
        fcm_token='device-123',
    )


class TestFirebaseApp:

    def test_not_configured(self, settings):
        settings.FCM_CREDENTIALS_FILE = ''

        assert get_firebase_app() is None

    def test_reuses_initialised_app(self, settings):
        settings.FCM_CREDENTIALS_FILE = '/secrets/firebase.json'
        app = Mock()

        with patch(f'{DISPATCH}.firebase_admin.get_app', return_value=app), \
                patch(f'{DISPATCH}.firebase_admin.initialize_app') as initialize_app:
            assert get_firebase_app() is app

        initialize_app.assert_not_called()

    def test_initialises_from_service_account(self, settings):
        settings.FCM_CREDENTIALS_FILE = '/secrets/firebase.json'
        app = Mock()

        with patch(f'{DISPATCH}.firebase_admin.get_app', side_effect=ValueError('no app')), \
                patch(f'{DISPATCH}.credentials.Certificate') as certificate, \
                patch(f'{DISPATCH}.firebase_admin.initialize_app', return_value=app) as initialize_app:
            assert get_firebase_app() is app

        certificate.assert_called_once_with('/secrets/firebase.json')
        initialize_app.assert_called_once_with(certificate.return_value)

    def test_missing_credentials_file(self, settings):
        settings.FCM_CREDENTIALS_FILE = '/does/not/exist.json'

        with patch(f'{DISPATCH}.firebase_admin.get_app', side_effect=ValueError('no app')), \
                patch(f'{DISPATCH}.credentials.Certificate', side_effect=FileNotFoundError('missing')):
            with pytest.raises(NotificationDeliveryError):
                get_firebase_app()


class TestSendPushNotification:

    def test_sends_fcm_message(self, firebase_app):
        app, send = firebase_app

        sent = send_push_notification(
            device_token='device-123',
            title='Hello',
            body='World',
            link='somewhere',
        )

        assert sent is True
        message = send.call_args.args[0]
        assert message.token == 'device-123'
        assert message.notification.title == 'Hello'
        assert message.notification.body == 'World'
        assert message.data == {'link': 'somewhere'}
        assert send.call_args.kwargs['app'] is app

    def test_skipped_without_credentials(self, settings):
        settings.FCM_CREDENTIALS_FILE = ''

        with patch(f'{DISPATCH}.messaging.send') as send:
            assert send_push_notification(device_token='d', title='t', body='b', link='l') is False

        send.assert_not_called()

    def test_firebase_failure(self, firebase_app):
        _, send = firebase_app
        send.side_effect = UnavailableError('FCM unavailable')

        with pytest.raises(NotificationDeliveryError):
            send_push_notification(device_token='d', title='t', body='b', link='l')

    def test_stale_device_token(self, firebase_app):
        _, send = firebase_app
        send.side_effect = InvalidArgumentError('The registration token is not a valid FCM registration token')

        with pytest.raises(NotificationDeliveryError):
            send_push_notification(device_token='stale', title='t', body='b', link='l')


@pytest.mark.django_db
class TestNotifyInvitation:

    def test_sends_invitation_alert(self, firebase_app, invitee):
        _, send = firebase_app

        assert notify_invitation(email='Invitee@Example.com', group_name='Family') is True

        message = send.call_args.args[0]
        assert message.token == 'device-123'
        assert message.notification.title == 'New Group Invitation 🎉'
        assert message.notification.body == 'You are invited to the group "Family"'
        assert message.data == {'link': 'group-invitation'}

    def test_no_account_for_email(self, firebase_app):
        _, send = firebase_app

        assert notify_invitation(email='stranger@example.com', group_name='Family') is False
        send.assert_not_called()

    def test_no_device_token(self, firebase_app, invitee):
        _, send = firebase_app
        invitee.fcm_token = ''
        invitee.save()

        assert notify_invitation(email=invitee.email, group_name='Family') is False
        send.assert_not_called()

    def test_delivery_failure_is_swallowed(self, firebase_app, invitee):
        _, send = firebase_app
        send.side_effect = UnavailableError('FCM unavailable')

        assert notify_invitation(email=invitee.email, group_name='Family') is False
