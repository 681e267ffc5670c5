import pytest
from io import StringIO
from django.core.management import call_command

from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group, Invitation


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_sample_data(self):
        out = StringIO()
        call_command('create_sample_data', stdout=out)

        assert 'Sample data created successfully!' in out.getvalue()
        assert User.objects.filter(email__endswith='@example.com').count() == 4
        assert Group.objects.count() == 2
        assert Car.objects.count() == 4
        assert Car.objects.filter(currently_in_use=True).count() == 1
        assert Invitation.objects.filter(email='charlie@example.com').exists()

    def test_is_idempotent(self):
        call_command('create_sample_data', stdout=StringIO())
        call_command('create_sample_data', stdout=StringIO())

        assert Group.objects.count() == 2
        assert Car.objects.count() == 4

    def test_clear(self):
        call_command('create_sample_data', stdout=StringIO())
        call_command('create_sample_data', '--clear', stdout=StringIO())

        assert Group.objects.count() == 2
        assert Invitation.objects.count() == 1
