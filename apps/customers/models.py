"""
Customer model: a person who books courts.
Mobile number is the identity key, so repeat bookers collapse into one row:
  +91 98765 43210  →  9876543210
  091-9876543210   →  9876543210
  9876543210       →  9876543210

A customer does not own bookings. `customer.bookings` is a reverse lookup
into the ledger.
"""
import re
from django.db import models
from apps.core.models import UUIDModel, TimestampedModel


def normalize_mobile(raw: str) -> str:
    """
    Reduce an Indian mobile number to its 10 significant digits.
    Raises ValueError if that is not possible.
    """
    digits = re.sub(r'\D', '', raw or '')

    if len(digits) == 12 and digits.startswith('91'):
        digits = digits[2:]
    elif len(digits) == 11 and digits.startswith('0'):
        digits = digits[1:]

    if len(digits) != 10:
        raise ValueError(
            f"Cannot normalise mobile number '{raw}': "
            f"expected 10 digits, got {len(digits)}."
        )
    return digits


class Customer(UUIDModel, TimestampedModel):
    name = models.CharField(max_length=120)
    mobile = models.CharField(max_length=20, unique=True)
    email = models.EmailField(blank=True)
    area = models.CharField(max_length=80, blank=True)

    class Meta:
        verbose_name = 'Customer'
        verbose_name_plural = 'Customers'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.mobile})"

    @classmethod
    def get_or_create_by_mobile(cls, name, mobile, email='', area=''):
        """
        Look up a customer by normalised mobile, creating one if needed.
        Name, email and area are refreshed from the latest details.
        """
        mobile = normalize_mobile(mobile)
        customer, created = cls.objects.get_or_create(
            mobile=mobile,
            defaults={'name': name, 'email': email, 'area': area},
        )
        if not created:
            update_fields = []
            for field, value in (('name', name), ('email', email), ('area', area)):
                if value and getattr(customer, field) != value:
                    setattr(customer, field, value)
                    update_fields.append(field)
            if update_fields:
                customer.save(update_fields=update_fields + ['updated_at'])
        return customer, created
