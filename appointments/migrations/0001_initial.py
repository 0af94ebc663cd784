import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('livestock', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('farmer_name', models.CharField(max_length=255)),
                ('farmer_phone', models.CharField(blank=True, default='', max_length=20)),
                ('vet_name', models.CharField(max_length=255)),
                ('vet_specialty', models.CharField(blank=True, default='', max_length=100)),
                ('vet_phone', models.CharField(blank=True, default='', max_length=20)),
                ('vet_email', models.EmailField(blank=True, default='', max_length=254)),
                ('livestock_name', models.CharField(max_length=100)),
                ('livestock_type', models.CharField(max_length=20)),
                ('date', models.DateField()),
                ('time', models.CharField(help_text="Slot label, e.g. '09:00' or 'Morning'", max_length=50)),
                ('reason', models.CharField(choices=[('routine-checkup', 'Routine Checkup'), ('vaccination', 'Vaccination'), ('illness', 'Illness'), ('injury', 'Injury'), ('pregnancy', 'Pregnancy'), ('other', 'Other')], max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20)),
                ('location', models.CharField(max_length=200)),
                ('diagnosis', models.TextField(blank=True, default='')),
                ('treatment', models.TextField(blank=True, default='')),
                ('medications', models.JSONField(blank=True, default=list)),
                ('follow_up_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='farmer_appointments', to=settings.AUTH_USER_MODEL)),
                ('livestock', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='appointments', to='livestock.livestock')),
                ('vet', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vet_appointments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'appointments',
                'ordering': ['-date', 'time'],
                'indexes': [
                    models.Index(fields=['farmer', '-date'], name='appt_farmer_date_idx'),
                    models.Index(fields=['vet', '-date'], name='appt_vet_date_idx'),
                ],
            },
        ),
    ]
