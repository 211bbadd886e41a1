from django.db import models


class SiteContent(models.Model):
    """Editable blocks of the public site, stored as one JSON list per key."""
    key        = models.CharField(max_length=64, unique=True)
    payload    = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "site content"

    def __str__(self):
        return self.key
