from django.db import models
import uuid


class TimestampedModel(models.Model):
    """UUID primary key plus creation/modification timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class OwnedModel(TimestampedModel):
    """
    Record scoped to one authenticated user.

    ``owner_id`` is the opaque user identifier issued by the identity
    provider (the ``sub`` claim of the access token). There is no local
    user table to point a foreign key at.
    """

    owner_id = models.CharField(max_length=255, db_index=True, editable=False)

    class Meta:
        abstract = True
