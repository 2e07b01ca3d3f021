from django.conf import settings
from django.utils.module_loading import import_string


DEFAULTS = {
    'ATTACHMENT_ADAPTER':
        'django_rehive_cloner.attachments.StorageAttachmentAdapter',
    'EVENT_PUBLISHER': 'django_rehive_cloner.signals.SignalEventPublisher',
}


class ClonerSettings:
    """
    Lazy access to the `REHIVE_CLONER` settings dict. Settings are read on
    every access so that overridden settings are respected.
    """

    def __getattr__(self, attr):
        if attr not in DEFAULTS:
            raise AttributeError("Invalid cloner setting: '{}'".format(attr))

        user_settings = getattr(settings, 'REHIVE_CLONER', None) or {}
        return user_settings.get(attr, DEFAULTS[attr])

    def import_class(self, attr):
        """
        Import the class referenced by a dotted path setting. Returns None if
        the setting is empty.
        """

        path = getattr(self, attr)
        if not path:
            return None
        if isinstance(path, str):
            return import_string(path)
        return path


cloner_settings = ClonerSettings()
