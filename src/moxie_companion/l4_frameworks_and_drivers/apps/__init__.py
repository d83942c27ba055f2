"""App subclasses — ChatApp."""

from moxie_companion.l4_frameworks_and_drivers.apps.chat import ChatApp

__all__ = ['ChatApp']
