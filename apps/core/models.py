"""
Shared model mixins for catalog and ledger records.
"""
import uuid
from django.db import models
from django.utils import timezone


class UUIDModel(models.Model):
    """UUID primary key. Booking and turf ids are handed to API callers."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class RetiredQuerySet(models.QuerySet):
    def live(self):
        return self.filter(retired_at__isnull=True)

    def retire(self):
        return self.update(retired_at=timezone.now())


class LiveManager(models.Manager):
    """Default manager: hides retired catalog rows."""
    def get_queryset(self):
        return RetiredQuerySet(self.model, using=self._db).live()


class RetirableModel(models.Model):
    """
    Catalog rows are retired, never deleted, because committed bookings
    still point at them. A retired row is invisible to the default manager
    and therefore reads as "not found" to the booking engine.
    """
    retired_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = LiveManager()
    all_objects = models.Manager()

    class Meta:
        abstract = True

    def retire(self):
        self.retired_at = timezone.now()
        self.save(update_fields=['retired_at'])

    def restore(self):
        self.retired_at = None
        self.save(update_fields=['retired_at'])

    @property
    def is_retired(self):
        return self.retired_at is not None


class CatalogModel(UUIDModel, TimestampedModel, RetirableModel):
    """UUID pk + timestamps + retirement, for turf catalog records."""
    class Meta:
        abstract = True
