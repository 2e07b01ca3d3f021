from django.db import models


def is_timestamp(field):
    """
    Check if a field is an automatically managed created/updated value. This
    covers date, datetime and time fields.
    """

    return bool(
        getattr(field, 'auto_now', False)
        or getattr(field, 'auto_now_add', False)
    )


def default_exempt_attributes(model):
    """
    Return the attribute names that are never copied onto a clone of `model`.

    This includes:
    1. The primary key of the model and of any multi-table parents.
    2. Fields that are managed automatically (`auto_now` and
       `auto_now_add`), ie. the created/updated timestamps.
    3. Counter columns named `<relation>_count` for every to-many relation.
    """

    opts = model._meta
    exempt = []

    for klass in (model, *opts.get_parent_list()):
        exempt.append(klass._meta.pk.attname)

    for field in opts.concrete_fields:
        if is_timestamp(field):
            exempt.append(field.attname)

    for field in opts.get_fields():
        if field.is_relation and (field.one_to_many or field.many_to_many):
            exempt.append("{}_count".format(field.name))
            if field.auto_created:
                exempt.append("{}_count".format(field.get_accessor_name()))

    # Preserve order while dropping duplicates.
    return list(dict.fromkeys(exempt))


def replicate_model_instance(instance, exempt=None, using=None):
    """
    Create an unsaved copy of a Django model instance.

    This function creates a new instance of the same model class that:
    1. Copies all concrete field values, except the `exempt` ones.
    2. Copies foreign key IDs rather than the related objects, so no related
       object is loaded or shared.
    3. Leaves exempt fields at their model defaults.
    4. Is bound to the `using` database alias, or to the source alias.

    Args:
        instance: Django model instance to copy
        exempt: Optional iterable of field names or attnames to skip
        using: Optional database alias to bind the copy to

    Returns:
        A new, unsaved instance of the same model class
    """

    if not isinstance(instance, models.Model):
        raise TypeError(
            f"Expected Django model instance, got {type(instance).__name__}"
        )

    exempt = set(exempt or ())
    model_class = instance.__class__

    # Build the constructor kwargs in a single pass. Foreign keys are copied
    # using their ID attribute.
    values = {}
    for field in instance._meta.concrete_fields:
        if field.name in exempt or field.attname in exempt:
            continue
        values[field.attname] = getattr(instance, field.attname)

    # Instantiate normally so exempt fields receive their defaults and the
    # instance is flagged as a new (adding) object.
    new_instance = model_class(**values)
    new_instance._state.db = using or instance._state.db

    return new_instance
