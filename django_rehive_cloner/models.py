from django.db import models

from .mixins import CloneableMixin


class DateModel(models.Model):
    """
    Abstract model that stores a created and updated date for each object.
    """

    updated = models.DateTimeField(auto_now=True)
    created = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        abstract = True

    def __str__(self):
        return str(self.created)


class CloneableModel(CloneableMixin, DateModel):
    """
    Abstract model that includes date and clone related functionality.
    """

    class Meta:
        abstract = True
