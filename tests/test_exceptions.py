from django_rehive_cloner.exceptions import (
    CannotDuplicateAttachmentError,
    CannotPersistCloneError,
    CannotResolveRelationError,
    DjangoBaseException
)


def test_default_detail_and_slug():
    error = CannotPersistCloneError()

    assert str(error) == "Cannot save the cloned object."
    assert error.error_slug == "cannot_persist_clone"
    assert error.status_code == 500


def test_custom_detail_keeps_default_slug():
    error = CannotDuplicateAttachmentError(detail="Cannot copy 'a.png'.")

    assert str(error) == "Cannot copy 'a.png'."
    assert error.error_slug == "cannot_duplicate_attachment"


def test_custom_slug():
    error = CannotResolveRelationError(detail="Nope.", error_slug="custom")

    assert error.error_slug == "custom"
    assert error.status_code == 400
    assert isinstance(error, DjangoBaseException)
