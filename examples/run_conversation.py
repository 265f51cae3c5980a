#!/usr/bin/env python3
"""
Run a scripted conversation through askstream and print the rendered turns.

Usage:
    uv run python examples/run_conversation.py
    uv run python examples/run_conversation.py --query "What is retrieval augmented generation?"
    uv run python examples/run_conversation.py --model anthropic:claude-3-5-sonnet
    uv run python examples/run_conversation.py --share      # replay as a public share page

Setup:
1. Copy .env.example to .env and configure at least one provider key:
   - OPENAI_API_KEY (default model provider)
   - ANTHROPIC_API_KEY, GROQ_API_KEY, OLLAMA_BASE_URL, ...

2. Optionally copy askstream_config.yaml.example to askstream_config.yaml
"""

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from askstream import ConversationLog, ConversationSession, ProviderRegistry, render_turns
from askstream.config import load_session_config
from askstream.session import SessionConfig
from askstream.testing import FakeWorkflow, InMemoryChatStore

# Load environment from .env
load_dotenv()


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure logging to show askstream logs, hiding noisy dependencies."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("askstream").setLevel(getattr(logging, level.upper(), logging.INFO))
    return logging.getLogger(__name__)


def describe(component) -> str:
    """One-line summary of a rendered component."""
    kind = component.kind
    if kind == "user_message":
        return f"user: {component.message} (share={component.show_share})"
    if kind == "answer":
        return f"answer: {component.result.value}"
    if kind == "related":
        return f"related: {component.related_queries.value}"
    return kind


async def main():
    parser = argparse.ArgumentParser(description="Run an askstream conversation")
    parser.add_argument("--query", default="What is a streaming value?")
    parser.add_argument("--model", default=None, help="provider:model id")
    parser.add_argument("--profile", default="default", help="askstream_config.yaml profile")
    parser.add_argument("--share", action="store_true", help="Render as a share page")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logger = setup_logging(args.log_level)

    try:
        config = load_session_config(args.profile)
    except FileNotFoundError:
        logger.info("No askstream_config.yaml found, using defaults")
        config = SessionConfig()

    store = InMemoryChatStore()
    session = ConversationSession(
        workflow=FakeWorkflow(
            answer="A streaming value is updated by one writer and read by many.",
            tool_results=[("search", {"query": args.query, "results": []})],
            related=["How do subscribers detach?", "What happens after done()?"],
        ),
        providers=ProviderRegistry.from_env(),
        store=store,
        config=config,
    )

    form = {"input": args.query}
    if args.model:
        form["model"] = args.model

    live = await session.submit(form)
    async for components in live.component.subscribe():
        logger.info(f"Live turn has {len(components or [])} components")
    await session.wait()

    chat = await store.get_chat(session.chat_id)
    if chat is None:
        parser.error("Conversation was not saved")

    logger.info(f"Saved '{chat.title}' at {chat.path}")

    log = ConversationLog.from_chat(chat, share=args.share)
    for turn in render_turns(log):
        print(f"[{turn.id}]")
        for component in turn.components:
            print(f"  - {describe(component)}")


if __name__ == "__main__":
    asyncio.run(main())
