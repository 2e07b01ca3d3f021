import logging

from django.core.files.storage import default_storage

from .exceptions import CannotDuplicateAttachmentError


logger = logging.getLogger(__name__)


class AttachmentAdapter:
    """
    Interface for duplicating files referenced by a cloned object.
    """

    def duplicate(self, reference, clone, attribute=None):
        """
        Duplicate a file, identified by the reference string, which was pulled
        from the `attribute` of a model. Return the reference of the new file.

        The clone should not be modified, the cloner sets the returned
        reference on it.
        """

        raise NotImplementedError


class StorageAttachmentAdapter(AttachmentAdapter):
    """
    Duplicate files stored in a Django storage. The copy is saved alongside
    the original, the storage picks an available name for it.

    Storages that overwrite existing files are not supported, the copy must be
    stored under a new name.
    """

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def duplicate(self, reference, clone, attribute=None):
        max_length = None
        if attribute is not None:
            max_length = clone._meta.get_field(attribute).max_length

        try:
            with self.storage.open(reference) as original:
                new_reference = self.storage.save(
                    reference, original, max_length=max_length
                )
        except OSError as exc:
            raise CannotDuplicateAttachmentError(
                detail="Cannot duplicate the file '{}'.".format(reference)
            ) from exc

        if new_reference == reference:
            raise CannotDuplicateAttachmentError(
                detail="The file '{}' was overwritten instead of copied.".format(
                    reference
                )
            )

        logger.debug(
            "Duplicated attachment %s to %s for %s.",
            reference, new_reference, clone._meta.label
        )

        return new_reference
