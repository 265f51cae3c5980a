"""
Pytest fixtures for askstream tests.

Provides message factories and fakes for fast testing without a real
generation controller or chat store.
"""

import pytest

from askstream.conversation import ConversationLog
from askstream.testing import FakeWorkflow, InMemoryChatStore, StaticProviderRegistry
from factories import answer, make_message, tool, user_input


@pytest.fixture
def message_factory():
    """Expose make_message to tests that build many entries."""
    return make_message


@pytest.fixture
def hello_log() -> ConversationLog:
    """One user input and its answer sharing id "1"."""
    return ConversationLog(
        chat_id="chat-1",
        messages=[user_input("1", "hi"), answer("1", "hello")],
    )


@pytest.fixture
def full_turn_log() -> ConversationLog:
    """A complete search turn: input, tool output, answer, related, followup."""
    return ConversationLog(
        chat_id="chat-2",
        messages=[
            user_input("u1", "what is rag?"),
            tool("t1", "search", {"query": "rag", "results": [{"title": "RAG"}]}),
            answer("t1", "RAG combines retrieval with generation."),
            make_message(
                id="t1", role="assistant", type="related", content=["rag vs fine-tuning"]
            ),
            make_message(id="f1", role="assistant", type="followup", content="followup"),
        ],
    )


@pytest.fixture
def providers() -> StaticProviderRegistry:
    return StaticProviderRegistry({"openai"})


@pytest.fixture
def chat_store() -> InMemoryChatStore:
    return InMemoryChatStore()


@pytest.fixture
def fake_workflow() -> FakeWorkflow:
    return FakeWorkflow(
        answer="Streaming values have one writer.",
        tool_results=[("search", {"query": "streams", "results": []})],
        related=["What is a subscriber?"],
    )
