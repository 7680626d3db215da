import apps.turfs.models
import datetime
import django.core.validators
import django.db.models.deletion
import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Game',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50, unique=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Turf',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('retired_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('name', models.CharField(max_length=120)),
                ('address', models.TextField(blank=True)),
                ('area', models.CharField(blank=True, max_length=80)),
                ('opening_time', models.TimeField(default=datetime.time(9, 0))),
                ('closing_time', models.TimeField(default=datetime.time(18, 0))),
                ('slot_minutes', models.PositiveIntegerField(default=apps.turfs.models.default_slot_minutes, help_text='Slot granularity. A trailing partial slot is dropped.', validators=[django.core.validators.MinValueValidator(1)])),
                ('platform_fee_percent', models.DecimalField(decimal_places=2, default=Decimal('5.00'), help_text='Platform commission deducted from payouts', max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('games', models.ManyToManyField(blank=True, related_name='turfs', to='turfs.game')),
            ],
            options={
                'verbose_name': 'Turf',
                'verbose_name_plural': 'Turfs',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Court',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=60)),
                ('position', models.PositiveIntegerField(default=0)),
                ('turf', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='courts', to='turfs.turf')),
            ],
            options={
                'verbose_name': 'Court',
                'verbose_name_plural': 'Courts',
                'ordering': ['turf', 'position', 'name'],
                'unique_together': {('turf', 'name')},
            },
        ),
    ]
