import uuid

from django.db import models


class Overlay(models.Model):
    """
    An overlay drawn on top of the player (text, image, logo...).

    The body is an opaque JSON document owned by the front end; only the
    identifier and timestamps are managed here.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    document = models.JSONField(
        default=dict,
        blank=True,
        help_text="Overlay body: name, type, content, position, size, style...",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return self.document.get("name") or str(self.id)
