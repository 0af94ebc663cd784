from io import StringIO
from unittest.mock import Mock, patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.models import User

pytestmark = pytest.mark.django_db


class TestCreateAdminCommand:

    def test_creates_admin(self):
        out = StringIO()

        call_command(
            'create_admin', email='root@vetconnect.rw', password='S3cure-pass!',
            name='Ada Mutesi', stdout=out
        )

        admin = User.objects.get(email='root@vetconnect.rw')
        assert admin.role == User.UserRole.ADMIN
        assert admin.is_staff
        assert admin.first_name == 'Ada'
        assert admin.check_password('S3cure-pass!')
        assert 'Created new user' in out.getvalue()

    def test_promotes_existing_user(self, farmer):
        call_command(
            'create_admin', email=farmer.email, password='N3w-pass!', name='Jean Uwimana',
            stdout=StringIO()
        )

        farmer.refresh_from_db()
        assert farmer.role == User.UserRole.ADMIN
        assert farmer.check_password('N3w-pass!')
        assert User.objects.count() == 1

    def test_password_required(self):
        with pytest.raises(CommandError):
            call_command('create_admin', email='root@vetconnect.rw', password='', stdout=StringIO())


class TestSendTestSmsCommand:

    def test_console_send(self, settings):
        settings.SMS_ENABLED = False
        out = StringIO()

        call_command('send_test_sms', '0788123456', 'Hello', stdout=out)

        assert 'Sending via console to +250788123456' in out.getvalue()
        assert 'Sent (simulated)' in out.getvalue()

    def test_unknown_provider(self, settings):
        settings.SMS_ENABLED = True

        with pytest.raises(CommandError):
            call_command('send_test_sms', '0788123456', 'Hello', provider='pigeon', stdout=StringIO())

    @patch('accounts.management.commands.send_test_sms.send_sms_async.delay')
    def test_queue(self, mock_delay):
        mock_delay.return_value = Mock(id='task-123')
        out = StringIO()

        call_command('send_test_sms', '0788123456', 'Hello', queue=True, stdout=out)

        mock_delay.assert_called_once_with('0788123456', 'Hello')
        assert 'task-123' in out.getvalue()
