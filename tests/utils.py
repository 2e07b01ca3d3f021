from django_rehive_cloner.attachments import AttachmentAdapter
from django_rehive_cloner.signals import EventPublisher


class RecordingPublisher(EventPublisher):
    """
    Keep published events in memory.
    """

    def __init__(self, log=None):
        self.log = log if log is not None else []
        self.events = []

    def publish(self, event, payload):
        self.events.append((event, payload))
        self.log.append(event)


class RecordingAttachmentAdapter(AttachmentAdapter):
    """
    Return a new reference for every duplicated file.
    """

    def __init__(self):
        self.calls = []

    def duplicate(self, reference, clone, attribute=None):
        self.calls.append((reference, clone))
        return "copies/{}-{}".format(len(self.calls), reference)


class FailingAttachmentAdapter(AttachmentAdapter):

    def __init__(self, error):
        self.error = error

    def duplicate(self, reference, clone, attribute=None):
        raise self.error
