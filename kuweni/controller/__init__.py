from .interaction import ActionState, ActionStatus, InteractionController
from .notifier import LogNotifier, Notification, Notifier, QueueNotifier

__all__ = [
    "ActionState",
    "ActionStatus",
    "InteractionController",
    "LogNotifier",
    "Notification",
    "Notifier",
    "QueueNotifier",
]
