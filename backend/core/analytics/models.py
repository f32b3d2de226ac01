from django.db import models
from django.utils import timezone


class Submission(models.Model):
    """Result of an appetite check, kept for reporting."""

    submission_id = models.CharField(max_length=100, primary_key=True)
    business_desc = models.TextField()
    naics_code = models.CharField(max_length=20)
    state = models.CharField(max_length=10)
    zipcode = models.CharField(max_length=20, blank=True, null=True)
    decision = models.CharField(max_length=50)
    confidence = models.FloatField(default=0)
    reason = models.TextField(blank=True, default="")
    matched_rule = models.CharField(max_length=100, blank=True, default="")
    evaluated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("-evaluated_at",)
        indexes = [
            models.Index(fields=("evaluated_at",), name="idx_submissions_evaluated"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.submission_id} {self.decision}"
