# Generated manually for the reservations app

import apps.reservations.models
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('parcels', '0002_seed_parcels'),
    ]

    operations = [
        migrations.CreateModel(
            name='Reservation',
            fields=[
                ('id', models.CharField(default=apps.reservations.models.generate_reservation_id, editable=False, max_length=16, primary_key=True, serialize=False)),
                ('buyer_name', models.CharField(max_length=200)),
                ('buyer_email', models.EmailField(max_length=254)),
                ('donor_name', models.CharField(blank=True, max_length=200)),
                ('anonymous', models.BooleanField(default=False)),
                ('receipt_requested', models.BooleanField(default=False)),
                ('buyer_address', models.CharField(blank=True, max_length=255, null=True)),
                ('buyer_city', models.CharField(blank=True, max_length=120, null=True)),
                ('buyer_zip', models.CharField(blank=True, max_length=16, null=True)),
                ('total_cents', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('pending', 'Offen'), ('paid', 'Bezahlt'), ('expired', 'Abgelaufen'), ('cancelled', 'Storniert')], default='pending', max_length=16)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('expires_at', models.DateTimeField(default=apps.reservations.models.default_expires_at)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('cancelled_at', models.DateTimeField(blank=True, null=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'reservations',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'expires_at'], name='reservation_status_exp_idx'),
                    models.Index(fields=['created_at'], name='reservation_created_idx'),
                    models.Index(fields=['buyer_email'], name='reservation_email_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ReservationItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('parcel', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='reservation_items', to='parcels.parcel')),
                ('reservation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='reservations.reservation')),
            ],
            options={
                'db_table': 'reservation_items',
                'ordering': ['id'],
                'indexes': [models.Index(fields=['reservation', 'active'], name='item_reservation_active_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('active', True)), fields=('parcel',), name='unique_active_parcel')],
            },
        ),
    ]
