from django.db import models

from apps.core.models import OwnedModel


class Store(OwnedModel):
    """Shop profile; every owner has at most one."""

    name = models.CharField(max_length=100)
    address = models.CharField(max_length=255, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    logo_url = models.URLField(max_length=500, blank=True)
    website = models.URLField(max_length=255, blank=True)

    class Meta:
        db_table = 'stores'
        constraints = [
            models.UniqueConstraint(fields=['owner_id'], name='uniq_store_owner'),
        ]

    def __str__(self):
        return self.name
