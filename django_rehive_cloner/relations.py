from django.core.exceptions import ObjectDoesNotExist
from django.db import models

from .exceptions import CannotResolveRelationError
from .utils.copy import is_timestamp


class RelationKind:
    """
    The kinds of relation a cloneable relation name can resolve to.
    """

    # A forward foreign key or one to one field. The related object is cloned
    # and the clone is pointed at the new related object.
    TO_ONE_OWNING = 'to_one_owning'
    # A forward or reverse many to many field. The related objects are shared
    # and only the junction rows are recreated for the clone.
    TO_MANY_PIVOTED = 'to_many_pivoted'
    # A reverse foreign key or one to one field. The related objects are owned
    # by the instance and are cloned along with it.
    TO_MANY_DIRECT = 'to_many_direct'


def is_generated_key(field):
    """
    Check if a primary key value is generated for new rows.
    """

    return isinstance(field, models.AutoField) or field.has_default()


class RelationDescriptor():
    """
    A named relation resolved against a specific model instance.

    The name can be a forward field name, a reverse relation name or a
    reverse accessor name (eg. `section_set`).
    """

    def __init__(self, instance, name):
        self.instance = instance
        self.name = name
        self.field = self._get_field(instance.__class__, name)
        self.kind = self._get_kind(self.field)

    def __str__(self):
        return "{}.{}".format(self.instance._meta.label, self.name)

    @staticmethod
    def _get_field(model, name):
        for field in model._meta.get_fields():
            if not field.is_relation:
                continue

            if field.name == name:
                return field

            # Reverse relations are usually accessed via their accessor name
            # rather than their query name.
            if (field.auto_created and not field.concrete
                    and field.get_accessor_name() == name):
                return field

        raise CannotResolveRelationError(
            detail="Cannot resolve relation '{}' on {}.".format(
                name, model._meta.label
            )
        )

    def _get_kind(self, field):
        if field.many_to_many:
            return RelationKind.TO_MANY_PIVOTED

        if field.concrete and field.one_to_one and not field.null:
            # The clone cannot be saved while it shares the unique key with
            # the source.
            raise CannotResolveRelationError(
                detail="Relation '{}' on {} is a required one to one field "
                    "and cannot be cloned.".format(
                        self.name, self.instance._meta.label
                    )
            )

        if field.concrete and (field.many_to_one or field.one_to_one):
            return RelationKind.TO_ONE_OWNING

        # Only reverse relations created by a foreign key or one to one field
        # are supported. This excludes generic relations.
        if (field.auto_created and not field.concrete
                and (field.one_to_many or field.one_to_one)):
            return RelationKind.TO_MANY_DIRECT

        raise CannotResolveRelationError(
            detail="Relation '{}' on {} is not a cloneable relation.".format(
                self.name, self.instance._meta.label
            )
        )

    @property
    def accessor_name(self):
        """
        The attribute used to access the relation on an instance.
        """

        if self.is_reverse:
            return self.field.get_accessor_name()
        return self.field.name

    @property
    def is_reverse(self):
        return self.field.auto_created and not self.field.concrete

    def bind(self, instance):
        """
        Return the same relation resolved against another instance.
        """

        return self.__class__(instance, self.name)

    def related(self):
        """
        Return a list of the objects currently related to the instance.
        """

        if self.kind == RelationKind.TO_ONE_OWNING:
            related = getattr(self.instance, self.accessor_name)
            return [related] if related is not None else []

        # A reverse one to one relation has a single object or raises an
        # error if there is none.
        if self.field.one_to_one:
            try:
                return [getattr(self.instance, self.accessor_name)]
            except ObjectDoesNotExist:
                return []

        return list(getattr(self.instance, self.accessor_name).all())

    def link(self, child):
        """
        Point the foreign key on a `child` object at the instance. Only
        supported for direct relations.
        """

        if self.kind != RelationKind.TO_MANY_DIRECT:
            raise ValueError(
                "Cannot link through a {} relation.".format(self.kind)
            )

        setattr(child, self.field.field.name, self.instance)

    def associate(self, related):
        """
        Point the owning foreign key on the instance at `related`.
        """

        if self.kind != RelationKind.TO_ONE_OWNING:
            raise ValueError(
                "Cannot associate through a {} relation.".format(self.kind)
            )

        setattr(self.instance, self.field.name, related)

    # Pivoted relation helpers.

    @property
    def m2m_field(self):
        return self.field.field if self.is_reverse else self.field

    @property
    def through(self):
        return self.m2m_field.remote_field.through

    @property
    def pivot_field_names(self):
        """
        The names of the junction model fields pointing at the instance and at
        the related object (in that order).
        """

        if self.is_reverse:
            return (
                self.m2m_field.m2m_reverse_field_name(),
                self.m2m_field.m2m_field_name()
            )

        return (
            self.m2m_field.m2m_field_name(),
            self.m2m_field.m2m_reverse_field_name()
        )

    def pivot_rows(self):
        """
        Return the junction rows linking the instance to its related objects.
        """

        source_name, target_name = self.pivot_field_names
        return list(
            self.through._default_manager
            .using(self.instance._state.db)
            .filter(**{source_name: self.instance})
            .select_related(target_name)
            .order_by('pk')
        )

    def pivot_target(self, row):
        return getattr(row, self.pivot_field_names[1])

    def pivot_attributes(self, row):
        """
        Return the attributes stored on a junction row, excluding the generated
        primary key, the keys of both sides and the timestamps.
        """

        attributes = {}

        for field in row._meta.concrete_fields:
            if field.name in self.pivot_field_names:
                continue
            if field.primary_key and is_generated_key(field):
                continue
            if is_timestamp(field):
                continue

            attributes[field.attname] = getattr(row, field.attname)

        return attributes

    def attach(self, related, attributes=None):
        """
        Create a junction row linking the instance to `related` with the given
        attributes. A row is created even if the objects are already linked.
        """

        if self.kind != RelationKind.TO_MANY_PIVOTED:
            raise ValueError(
                "Cannot attach through a {} relation.".format(self.kind)
            )

        source_name, target_name = self.pivot_field_names
        values = {source_name: self.instance, target_name: related}
        values.update(attributes or {})

        return self.through._default_manager.using(
            self.instance._state.db
        ).create(**values)
