from django.db import models
import uuid


class Car(models.Model):
    """A car shared by the members of one group."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='cars')
    name = models.CharField(max_length=200)
    icon = models.CharField(max_length=100, blank=True)

    # Null coordinates mean the car was never parked
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    address = models.CharField(max_length=500, blank=True)
    note = models.TextField(blank=True)

    currently_in_use = models.BooleanField(default=False)
    currently_used_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='claimed_cars',
    )
    currently_used_by_full_name = models.CharField(max_length=200, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cars'
        indexes = [
            models.Index(fields=['group', 'name'], name='cars_group_name_idx'),
            models.Index(fields=['currently_used_by'], name='cars_used_by_idx'),
        ]
        ordering = ['name', 'created_at']

    def __str__(self):
        return self.name

    @property
    def is_parked(self):
        return self.latitude is not None and self.longitude is not None

    @property
    def location(self):
        """Return (latitude, longitude) or None when never parked."""
        if not self.is_parked:
            return None
        return (self.latitude, self.longitude)
