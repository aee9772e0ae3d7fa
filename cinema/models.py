"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

# decimal places of every money column
PRICE_PLACES = 2


class Movie(models.Model):
    """Catalog reference for movies."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]

    def __str__(self) -> str:
        return self.title


class Showroom(models.Model):
    """Persistence model for showrooms."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    total_seats = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class LayoutSeat(models.Model):
    """One seat of a showroom's layout."""

    showroom = models.ForeignKey(
        Showroom, on_delete=models.CASCADE, related_name="layout_seats"
    )
    position = models.PositiveIntegerField()
    label = models.CharField(max_length=20)
    seat_type = models.CharField(max_length=50)
    premium_percent = models.DecimalField(max_digits=6, decimal_places=2)

    class Meta:
        ordering = ["showroom", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["showroom", "label"], name="unique_layout_seat_label"
            ),
            models.UniqueConstraint(
                fields=["showroom", "position"], name="unique_layout_seat_position"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.showroom.name} {self.label} ({self.seat_type})"


class Show(models.Model):
    """Persistence model for shows."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name="shows")
    showroom = models.ForeignKey(
        Showroom, on_delete=models.CASCADE, related_name="shows"
    )
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    base_price = models.DecimalField(max_digits=10, decimal_places=PRICE_PLACES)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(
                fields=["showroom", "starts_at"], name="cinema_show_showroo_5d1c3e_idx"
            ),
            models.Index(fields=["ends_at"], name="cinema_show_ends_at_8a2f4b_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(ends_at__gt=models.F("starts_at")),
                name="show_ends_after_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.movie.title} - {self.starts_at}"


class Booking(models.Model):
    """Persistence model for seat bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    show = models.ForeignKey(Show, on_delete=models.CASCADE, related_name="bookings")
    seat_label = models.CharField(max_length=20)
    seat_type = models.CharField(max_length=50)
    premium_percent = models.DecimalField(max_digits=6, decimal_places=2)
    base_price = models.DecimalField(max_digits=10, decimal_places=PRICE_PLACES)
    total_price = models.DecimalField(max_digits=10, decimal_places=PRICE_PLACES)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["show", "seat_label"], name="unique_booking_show_seat"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.seat_label} - {self.total_price}"
