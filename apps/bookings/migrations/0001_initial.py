import django.core.validators
import django.db.models.deletion
import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('customers', '0001_initial'),
        ('turfs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CourtDay',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('booking_date', models.DateField()),
                ('court', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='turfs.court')),
                ('turf', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='turfs.turf')),
            ],
            options={
                'verbose_name': 'Court Day',
                'verbose_name_plural': 'Court Days',
                'constraints': [models.UniqueConstraint(fields=('turf', 'court', 'booking_date'), name='uq_court_day')],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('booking_date', models.DateField(db_index=True)),
                ('game', models.CharField(max_length=50)),
                ('team_size', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('payment_status', models.CharField(blank=True, choices=[('PENDING', 'Pending'), ('PAID', 'Paid'), ('FAILED', 'Failed'), ('REFUNDED', 'Refunded')], db_index=True, max_length=10, null=True)),
                ('amount_paid', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('payment_method', models.CharField(blank=True, choices=[('UPI', 'UPI'), ('CARD', 'Card'), ('NET_BANKING', 'Net Banking'), ('CASH', 'Cash')], max_length=20)),
                ('request_key', models.CharField(blank=True, max_length=64, null=True)),
                ('court', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='turfs.court')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='customers.customer')),
                ('turf', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='turfs.turf')),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-booking_date', '-created_at'],
                'indexes': [models.Index(fields=['turf', 'court', 'booking_date'], name='booking_turf_court_date_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('request_key__isnull', False)), fields=('request_key',), name='uq_booking_request_key')],
            },
        ),
        migrations.CreateModel(
            name='BookedSlot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('booking_date', models.DateField()),
                ('start_time', models.TimeField()),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slots', to='bookings.booking')),
                ('court', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='turfs.court')),
                ('turf', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='turfs.turf')),
            ],
            options={
                'verbose_name': 'Booked Slot',
                'verbose_name_plural': 'Booked Slots',
                'ordering': ['start_time'],
                'constraints': [models.UniqueConstraint(fields=('turf', 'court', 'booking_date', 'start_time'), name='uq_booked_slot_key')],
            },
        ),
    ]
