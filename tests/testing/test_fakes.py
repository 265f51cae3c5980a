"""Tests for the askstream.testing fakes."""

from askstream.conversation import ConversationState
from askstream.projection import render_turns
from askstream.session import ChatStore, GenerationSinks, ProviderAvailability, Workflow
from askstream.testing import FakeWorkflow, InMemoryChatStore, StaticProviderRegistry


class TestProtocols:
    """Fakes satisfy the boundary protocols."""

    def test_fake_workflow_is_workflow(self):
        assert isinstance(FakeWorkflow(), Workflow)

    def test_in_memory_store_is_chat_store(self):
        assert isinstance(InMemoryChatStore(), ChatStore)

    def test_static_registry_is_provider_availability(self):
        assert isinstance(StaticProviderRegistry(), ProviderAvailability)


class TestFakeWorkflow:
    async def test_groups_turn_under_one_id(self):
        workflow = FakeWorkflow(
            answer="hello there",
            tool_results=[("retrieve", {"url": "https://example.com"})],
            related=["more?"],
            followup=False,
        )
        state = ConversationState()
        sinks = GenerationSinks()

        await workflow(sinks, state, [], False, "openai:gpt-4o-mini")

        messages = state.get().messages
        assert {m.id for m in messages} == {workflow.turn_ids[0]}
        assert [m.type for m in messages] == ["tool", "answer", "related"]
        assert [t.id for t in render_turns(state.get())] == workflow.turn_ids

    async def test_drives_sinks_to_done(self):
        sinks = GenerationSinks()

        await FakeWorkflow(chunk_size=2)(sinks, ConversationState(), [], False, "m:x")

        assert sinks.ui_stream.is_done
        assert sinks.is_generating.value is False
        assert sinks.is_collapsed.value is False

    async def test_answer_streams_in_chunks(self):
        sinks = GenerationSinks()
        workflow = FakeWorkflow(answer="abcdef", chunk_size=2, followup=False)

        await workflow(sinks, ConversationState(), [], False, "m:x")

        answer = sinks.ui_stream.value[-1]
        assert answer.result.value == "abcdef"


class TestGenerationSinks:
    def test_defaults(self):
        sinks = GenerationSinks()

        assert sinks.ui_stream.status == "pending"
        assert sinks.is_collapsed.value is False
        assert sinks.is_generating.value is True

    def test_close_open(self):
        sinks = GenerationSinks()
        sinks.ui_stream.update(["partial"])

        sinks.close_open()

        assert sinks.ui_stream.value == ["partial"]
        assert sinks.is_collapsed.is_done
        assert sinks.is_generating.value is False

    def test_close_open_leaves_finished_sinks(self):
        sinks = GenerationSinks()
        sinks.is_collapsed.done(True)

        sinks.close_open()

        assert sinks.is_collapsed.value is True


class TestInMemoryChatStore:
    async def test_save_and_get(self, hello_log):
        from askstream.session import build_chat_record

        store = InMemoryChatStore()
        chat = build_chat_record(hello_log)

        await store.save_chat(chat)

        assert await store.get_chat(chat.id) is chat
        assert await store.get_chat("missing") is None
