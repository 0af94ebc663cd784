import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Alert',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('message', models.CharField(max_length=160)),
                ('alert_type', models.CharField(choices=[('broadcast', 'Broadcast'), ('individual', 'Individual')], db_index=True, max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('success_count', models.PositiveIntegerField(default=0)),
                ('failure_count', models.PositiveIntegerField(default=0)),
                ('audience', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('sender', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sent_alerts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'alerts',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='AlertRecipient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(help_text='Order in which the recipient was attempted')),
                ('phone', models.CharField(help_text='Normalized number the SMS was sent to', max_length=32)),
                ('status', models.CharField(choices=[('delivered', 'Delivered'), ('failed', 'Failed')], max_length=20)),
                ('error', models.CharField(blank=True, default='', max_length=255)),
                ('alert', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deliveries', to='alerts.alert')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='alert_deliveries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'alert_recipients',
                'ordering': ['position'],
                'constraints': [models.UniqueConstraint(fields=('alert', 'position'), name='unique_alert_position')],
            },
        ),
        migrations.AddField(
            model_name='alert',
            name='recipients',
            field=models.ManyToManyField(related_name='received_alerts', through='alerts.AlertRecipient', to=settings.AUTH_USER_MODEL),
        ),
    ]
