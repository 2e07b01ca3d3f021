from django.dispatch import Signal


# Sent before a clone is saved. Receivers get `event`, `clone` and `source`
# and may modify the clone.
cloning = Signal()

# Sent after a clone and all its cloned relations are saved.
cloned = Signal()


class EventPublisher:
    """
    Interface for publishing clone lifecycle events.
    """

    def publish(self, event, payload):
        """
        Publish a named event. The payload is a `(clone, source)` tuple.
        """

        raise NotImplementedError


class SignalEventPublisher(EventPublisher):
    """
    Publish clone events as Django signals. The sender is the source model
    class so receivers can listen for a specific model.

    Signals are sent with `send()` so receiver errors propagate to the code
    that triggered the clone.
    """

    signals = {
        'cloning': cloning,
        'cloned': cloned,
    }

    def publish(self, event, payload):
        clone, source = payload
        phase = event.split(':', 1)[0]

        try:
            signal = self.signals[phase]
        except KeyError:
            raise ValueError("Unknown clone event '{}'.".format(event))

        signal.send(
            sender=source.__class__, event=event, clone=clone, source=source
        )
