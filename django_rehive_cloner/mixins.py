from .utils.copy import default_exempt_attributes


class CloneableMixin:
    """
    Mixin that declares how instances of a model are cloned.

    Set the following class attributes to customize cloning:
    - `clone_exempt_attributes` : fields that should not be copied in
      addition to the primary key, timestamps and `<relation>_count` fields.
    - `cloneable_file_attributes` : file fields whose files are duplicated.
    - `cloneable_relations` : relations that are cloned or re-attached.

    Override `on_cloning` and `on_cloned` to modify or inspect clones.
    """

    clone_exempt_attributes = None
    cloneable_file_attributes = None
    cloneable_relations = None

    def get_clone_exempt_attributes(self):
        """
        Return the list of attributes on this model that should not be cloned.
        """

        defaults = default_exempt_attributes(self.__class__)

        if not self.clone_exempt_attributes:
            return defaults

        return [*defaults, *self.clone_exempt_attributes]

    def get_cloneable_file_attributes(self):
        """
        Return a list of attributes that reference files that should be
        duplicated when the model is cloned.
        """

        if not self.cloneable_file_attributes:
            return []

        return list(self.cloneable_file_attributes)

    def get_cloneable_relations(self):
        """
        Return the list of relations on this model that should be cloned.
        """

        if not self.cloneable_relations:
            return []

        return list(self.cloneable_relations)

    def add_cloneable_relation(self, relation):
        """
        Add a relation to the cloneable relations of this instance only.
        """

        relations = self.get_cloneable_relations()

        if relation in relations:
            return

        relations.append(relation)
        self.cloneable_relations = relations

    def duplicate(self, cloner):
        """
        Clone the current instance using the given cloner.
        """

        return cloner.duplicate(self)

    def duplicate_to(self, cloner, using):
        """
        Clone the current instance into another database.
        """

        return cloner.duplicate_to(self, using)

    def on_cloning(self, src, child=False):
        """
        Called on the clone before it is saved for the first time.
        """

        pass

    def on_cloned(self, src):
        """
        Called on the clone once it and its relations have been saved.
        """

        pass


class DefaultCloneable:
    """
    Default clone behaviour for model instances that don't use the
    `CloneableMixin`.
    """

    def __init__(self, instance):
        self.instance = instance

    def get_clone_exempt_attributes(self):
        return default_exempt_attributes(self.instance.__class__)

    def get_cloneable_file_attributes(self):
        return []

    def get_cloneable_relations(self):
        return []

    def on_cloning(self, src, child=False):
        pass

    def on_cloned(self, src):
        pass


def get_cloneable(instance):
    """
    Return an object implementing the cloneable interface for an instance.
    """

    if isinstance(instance, CloneableMixin):
        return instance

    return DefaultCloneable(instance)
