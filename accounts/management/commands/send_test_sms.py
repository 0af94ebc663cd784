"""
Send one SMS through the configured gateway.

Usage:
    python manage.py send_test_sms 0788123456 "Hello from VetConnect"
    python manage.py send_test_sms 0788123456 "Hi" --provider africastalking
    python manage.py send_test_sms 0788123456 "Hi" --queue
"""
from django.core.management.base import BaseCommand, CommandError

from core.sms_service import build_sms_gateway
from core.tasks import send_sms_async


class Command(BaseCommand):
    help = 'Sends a test SMS through the configured SMS provider'

    def add_arguments(self, parser):
        parser.add_argument('phone')
        parser.add_argument('message')
        parser.add_argument('--provider', default=None, help='Override SMS_PROVIDER')
        parser.add_argument(
            '--queue',
            action='store_true',
            help='Hand the message to the Celery worker instead of sending inline'
        )

    def handle(self, *args, **options):
        if options['queue']:
            task = send_sms_async.delay(options['phone'], options['message'])
            self.stdout.write(self.style.SUCCESS(f'✓ Queued as task {task.id}'))
            return

        try:
            gateway = build_sms_gateway(options['provider'])
        except ValueError as e:
            raise CommandError(str(e))

        self.stdout.write(f'Sending via {gateway.name} to {gateway.normalize(options["phone"])}...')
        result = gateway.send(options['phone'], options['message'])

        if result.success:
            self.stdout.write(self.style.SUCCESS(f'✓ Sent ({result.status}) {result.message_id or ""}'))
        else:
            raise CommandError(f'Send failed: {result.error}')
