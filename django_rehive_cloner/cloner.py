import logging

from django.db import DatabaseError, transaction

from .exceptions import CannotPersistCloneError
from .mixins import get_cloneable
from .relations import RelationDescriptor, RelationKind
from .settings import cloner_settings
from .signals import SignalEventPublisher
from .utils.copy import replicate_model_instance


logger = logging.getLogger(__name__)


class CloneContext():
    """
    State for a single clone operation. A new context is derived for every
    related object that is cloned so that nothing is shared between separate
    calls to the cloner.
    """

    def __init__(self, using=None, parent_relation=None):
        """
        `using` is the database alias clones are written to (if different from
        the source). `parent_relation` is the relation, bound to the parent
        clone, through which a child object is being cloned.
        """

        self.using = using
        self.parent_relation = parent_relation

    @property
    def is_child(self):
        return self.parent_relation is not None

    def child(self, relation):
        return self.__class__(using=self.using, parent_relation=relation)


class Cloner():
    """
    Clone model instances along with their files and relations.
    """

    CLONING_EVENT = 'cloning'
    CLONED_EVENT = 'cloned'

    def __init__(self, attachment=None, events=None):
        self.attachment = attachment
        self.events = events if events is not None else SignalEventPublisher()

    @classmethod
    def from_settings(cls):
        """
        Instantiate a cloner using the collaborators in `REHIVE_CLONER`.
        """

        attachment_class = cloner_settings.import_class('ATTACHMENT_ADAPTER')
        events_class = cloner_settings.import_class('EVENT_PUBLISHER')

        return cls(
            attachment=attachment_class() if attachment_class else None,
            events=events_class() if events_class else None
        )

    def duplicate(self, instance, context=None):
        """
        Clone a model instance and all of its files and relations. Returns the
        new, saved instance.
        """

        if context is None:
            context = CloneContext()

        clone = self.clone_model(instance, context)

        self.dispatch_on_cloning_event(clone, instance, context)

        relation = context.parent_relation
        if relation is not None:
            # Owning relations are associated once the related clone exists.
            if relation.kind != RelationKind.TO_ONE_OWNING:
                relation.link(clone)
                self.save(clone, context)
        else:
            self.save(clone, context)

        self.duplicate_attachments(instance, clone)
        self.save(clone, context)

        self.clone_relations(instance, clone, context)

        self.dispatch_on_cloned_event(clone, instance)

        logger.debug(
            "Cloned %s %s to %s.",
            instance._meta.label, instance.pk, clone.pk
        )

        return clone

    def duplicate_to(self, instance, using):
        """
        Clone a model instance into the `using` database.
        """

        return self.duplicate(instance, CloneContext(using=using))

    def clone_model(self, instance, context):
        """
        Create an unsaved copy of the instance without exempt attributes.
        """

        cloneable = get_cloneable(instance)
        clone = replicate_model_instance(
            instance,
            exempt=cloneable.get_clone_exempt_attributes(),
            using=context.using
        )

        # A copied one to one key would clash with the source until the
        # related object is cloned and associated.
        for relation_name in cloneable.get_cloneable_relations():
            relation = RelationDescriptor(instance, relation_name)
            if (relation.kind == RelationKind.TO_ONE_OWNING
                    and relation.field.one_to_one):
                setattr(clone, relation.field.attname, None)

        return clone

    def persist(self, instance, using, operation, *args, **kwargs):
        """
        Run a database write for a clone. Database errors are rolled back to a
        savepoint and raised as a `CannotPersistCloneError`.
        """

        try:
            with transaction.atomic(using=using):
                return operation(*args, **kwargs)
        except DatabaseError as exc:
            raise CannotPersistCloneError(
                detail="Cannot save clone of {}: {}".format(
                    instance._meta.label, exc
                )
            ) from exc

    def save(self, clone, context):
        using = context.using or clone._state.db
        self.persist(clone, using, lambda: clone.save(using=using))

    def duplicate_attachments(self, instance, clone):
        """
        Duplicate all attachments and update the clone's attribute values.
        """

        if self.attachment is None:
            return

        for attribute in get_cloneable(clone).get_cloneable_file_attributes():
            original = getattr(instance, attribute)
            # File fields return a `FieldFile`, use its stored name.
            reference = getattr(original, 'name', original)

            if not reference:
                continue

            setattr(clone, attribute, self.attachment.duplicate(
                reference, clone, attribute=attribute
            ))

    def get_event_name(self, event, instance):
        return "{}: {}".format(event, instance._meta.label)

    def dispatch_on_cloning_event(self, clone, src, context):
        get_cloneable(clone).on_cloning(src, context.is_child)
        self.events.publish(
            self.get_event_name(self.CLONING_EVENT, src), (clone, src)
        )

    def dispatch_on_cloned_event(self, clone, src):
        get_cloneable(clone).on_cloned(src)
        self.events.publish(
            self.get_event_name(self.CLONED_EVENT, src), (clone, src)
        )

    def clone_relations(self, instance, clone, context):
        """
        Loop through relations and clone or re-attach them.
        """

        for relation_name in get_cloneable(instance).get_cloneable_relations():
            self.duplicate_relation(instance, relation_name, clone, context)

    def duplicate_relation(self, instance, relation_name, clone, context):
        relation = RelationDescriptor(instance, relation_name)

        logger.debug("Duplicating %s relation %s.", relation.kind, relation)

        if relation.kind == RelationKind.TO_MANY_PIVOTED:
            self.duplicate_pivoted_relation(relation, clone, context)
        else:
            self.duplicate_direct_relation(relation, clone, context)

    def duplicate_pivoted_relation(self, relation, clone, context):
        """
        Duplicate a many-to-many style relation where the related objects are
        only attached to the clone.
        """

        # The related objects may not exist in the other database or could
        # have a different primary key.
        if context.using:
            logger.info(
                "Skipping %s, relation cannot be cloned to database %s.",
                relation, context.using
            )
            return

        clone_relation = relation.bind(clone)

        for row in relation.pivot_rows():
            self.persist(
                clone,
                clone._state.db,
                clone_relation.attach,
                relation.pivot_target(row),
                relation.pivot_attributes(row)
            )

    def duplicate_direct_relation(self, relation, clone, context):
        """
        Duplicate a one-to-many style relation where the related objects are
        also cloned and then associated.
        """

        clone_relation = relation.bind(clone)

        for related in relation.related():
            related_clone = self.duplicate(
                related, context.child(clone_relation)
            )

            if clone_relation.kind == RelationKind.TO_ONE_OWNING:
                clone_relation.associate(related_clone)
                self.save(clone, context)
