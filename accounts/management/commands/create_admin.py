"""
Management command to create (or refresh) the VetConnect administrator.

Usage:
    python manage.py create_admin --email admin@vetconnect.rw --password '...'

Defaults come from ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME and ADMIN_PHONE.
"""
import os

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import User
from accounts.serializers import split_name


class Command(BaseCommand):
    help = 'Creates the VetConnect administrator account'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.getenv('ADMIN_EMAIL', 'admin@vetconnect.com'))
        parser.add_argument('--password', default=os.getenv('ADMIN_PASSWORD'))
        parser.add_argument('--name', default=os.getenv('ADMIN_NAME', 'System Administrator'))
        parser.add_argument('--phone', default=os.getenv('ADMIN_PHONE', ''))

    def handle(self, *args, **options):
        email = options['email']
        password = options['password']
        first_name, last_name = split_name(options['name'])

        if not password:
            raise CommandError('Provide --password or set ADMIN_PASSWORD')

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()
            if user:
                self.stdout.write(
                    self.style.WARNING(f'User with email {email} already exists.')
                )

                # Update user to ensure correct settings
                user.role = User.UserRole.ADMIN
                user.first_name = first_name
                user.last_name = last_name
                user.is_active = True
                user.is_staff = True
                if options['phone']:
                    user.phone = options['phone']
                user.set_password(password)
                user.save()

                self.stdout.write(self.style.SUCCESS(f'✓ Updated existing user: {email}'))
            else:
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=options['phone'],
                    role=User.UserRole.ADMIN,
                    is_staff=True,
                )
                self.stdout.write(self.style.SUCCESS(f'✓ Created new user: {email}'))

        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(self.style.SUCCESS('VETCONNECT ADMIN USER CREATED/UPDATED'))
        self.stdout.write('=' * 60)
        self.stdout.write(f'Name:      {user.get_full_name()}')
        self.stdout.write(f'Email:     {user.email}')
        self.stdout.write(f'Phone:     {user.phone or "-"}')
        self.stdout.write(f'Role:      {user.get_role_display()}')
        self.stdout.write(f'Is Staff:  {user.is_staff}')
        self.stdout.write('=' * 60)
        self.stdout.write('\n' + self.style.SUCCESS('LOGIN INSTRUCTIONS:'))
        self.stdout.write('1. POST to /api/auth/login/ with {"email": ..., "password": ...}')
        self.stdout.write('2. Use the returned access token for admin API calls:')
        self.stdout.write('   Authorization: Bearer <access_token>')
        self.stdout.write('=' * 60 + '\n')
