"""
Abstract base model shared by the domain apps.

Base Classes:
    BaseModel: created_at / updated_at timestamps

Usage:
    from core.models import BaseModel

    class Group(BaseModel):
        name = models.CharField(max_length=200)

Note:
    created_at is indexed because threads, conversation lists and group
    lists all sort on it.
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Abstract model with creation and modification timestamps.

    Fields:
        created_at: Set once when the row is inserted
        updated_at: Refreshed on every save
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.pk})"
