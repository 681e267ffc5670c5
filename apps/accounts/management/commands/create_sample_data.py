"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice, bob, charlie)
- 2 groups (Novak Family, Office Pool)
- 4 cars, some parked and one in use
- A pending invitation for charlie
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.cars.models import Car
from apps.groups.models import Group, GroupMembership, Invitation

SAMPLE_EMAILS = [
    'admin@example.com',
    'alice@example.com',
    'bob@example.com',
    'charlie@example.com',
]


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        groups = self.create_groups(users)
        self.create_cars(users, groups)
        self.create_invitations(users, groups)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')
        self.stdout.write('  charlie@example.com / password123')

    def clear_data(self):
        """Remove the sample users together with their groups and cars."""
        groups = Group.objects.filter(memberships__user__email__in=SAMPLE_EMAILS).distinct()
        Car.objects.filter(group__in=groups).delete()
        Group.objects.filter(id__in=groups.values('id')).delete()
        Invitation.objects.filter(email__in=SAMPLE_EMAILS).delete()
        User.objects.filter(email__in=SAMPLE_EMAILS).delete()

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, created = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'first_name': 'Admin',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        if created:
            admin.set_password('admin123')
            admin.save()

        people = {}
        for key, first_name, last_name in [
            ('alice', 'Alice', 'Novak'),
            ('bob', 'Bob', 'Novak'),
            ('charlie', 'Charlie', 'Svoboda'),
        ]:
            user, created = User.objects.get_or_create(
                email=f'{key}@example.com',
                defaults={'first_name': first_name, 'last_name': last_name},
            )
            if created:
                user.set_password('password123')
                user.save()
            people[key] = user

        return {'admin': admin, **people}

    def create_groups(self, users):
        """Create groups with their members."""
        self.stdout.write('  Creating groups...')

        family, _ = Group.objects.get_or_create(name='Novak Family')
        for key in ['alice', 'bob']:
            GroupMembership.objects.get_or_create(group=family, user=users[key])

        office, _ = Group.objects.get_or_create(name='Office Pool')
        for key in ['bob', 'admin']:
            GroupMembership.objects.get_or_create(group=office, user=users[key])

        return {'family': family, 'office': office}

    def create_cars(self, users, groups):
        """Create cars in different usage states."""
        self.stdout.write('  Creating cars...')

        Car.objects.get_or_create(
            group=groups['family'],
            name="Mom's Mazda",
            defaults={
                'icon': 'sedan',
                'latitude': 50.0875,
                'longitude': 14.4213,
                'address': 'Staroměstské náměstí 1, Prague',
                'note': 'Tank is almost empty',
            }
        )
        Car.objects.get_or_create(
            group=groups['family'],
            name='Old Volvo',
            defaults={
                'icon': 'wagon',
                'currently_in_use': True,
                'currently_used_by': users['bob'],
                'currently_used_by_full_name': users['bob'].get_full_name(),
            }
        )
        Car.objects.get_or_create(
            group=groups['office'],
            name='Delivery Van',
            defaults={
                'icon': 'van',
                'latitude': 49.1951,
                'longitude': 16.6068,
                'address': 'Náměstí Svobody 1, Brno',
            }
        )
        # Never parked
        Car.objects.get_or_create(group=groups['office'], name='Spare Skoda')

    def create_invitations(self, users, groups):
        """Create a pending invitation."""
        self.stdout.write('  Creating invitations...')

        Invitation.objects.get_or_create(
            email=users['charlie'].email,
            group=groups['family'],
            defaults={
                'group_name': groups['family'].name,
                'invited_by': users['alice'],
            }
        )
