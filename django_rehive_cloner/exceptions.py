from django.utils.translation import gettext_lazy as _
from django.utils.encoding import force_str
from rest_framework import status


class DjangoBaseException(Exception):
    """
    Generic exception that handles a status code, default detail and slug.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = _('A server error occurred.')
    default_error_slug = 'internal_error'

    def __init__(self, detail=None, error_slug=None):
        if detail is not None:
            self.detail = force_str(detail)
            self.error_slug = force_str(
                error_slug if error_slug is not None
                else self.default_error_slug
            )
        else:
            self.detail = force_str(self.default_detail)
            self.error_slug = force_str(self.default_error_slug)

    def __str__(self):
        return self.detail


class CannotPersistCloneError(DjangoBaseException):
    """
    Error for when a clone could not be written to the database.
    """

    default_detail = _('Cannot save the cloned object.')
    default_error_slug = 'cannot_persist_clone'


class CannotDuplicateAttachmentError(DjangoBaseException):
    """
    Error for when a file referenced by a cloned object could not be copied.
    """

    default_detail = _('Cannot duplicate the attachment of this object.')
    default_error_slug = 'cannot_duplicate_attachment'


class CannotResolveRelationError(DjangoBaseException):
    """
    Error for when a declared cloneable relation does not exist on the model
    or is not a supported relation type.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Cannot resolve a cloneable relation.')
    default_error_slug = 'cannot_resolve_relation'
