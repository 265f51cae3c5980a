"""Testing utilities: fakes for the collaborators of a ConversationSession."""

from .fakes import FakeWorkflow, InMemoryChatStore, StaticProviderRegistry

__all__ = ["FakeWorkflow", "InMemoryChatStore", "StaticProviderRegistry"]
