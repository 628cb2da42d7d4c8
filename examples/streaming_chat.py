"""
Example: Streaming chat

Shows the three ways to consume a streamed chat completion: callbacks,
a blocking iterator and an async iterator.
"""

import asyncio
import threading

from openai_http_sdk import ChatMessage, ChatQuery, ChatRole, OpenAI


def build_query(prompt: str) -> ChatQuery:
    return ChatQuery(
        model="gpt-4o-mini",
        messages=[ChatMessage(role=ChatRole.USER, content=prompt)],
        max_tokens=100
    )


def example_callbacks(client: OpenAI):
    """Callbacks run on a transport worker thread."""
    print("=== Callbacks ===\n")
    done = threading.Event()

    def on_result(result):
        if result.is_success:
            print(result.value.get_text(), end="", flush=True)
        else:
            print(f"\n[bad event: {result.error}]")

    def completion(error):
        print(f"\n\nFinished, error={error!r}")
        done.set()

    client.chats_stream(build_query("Write a haiku about Python"), on_result, completion)
    done.wait()


def example_iterator(client: OpenAI):
    print("\n=== Blocking iterator ===\n")
    with client.stream_chats(build_query("Count to five")) as stream:
        for result in stream:
            if result.is_success:
                print(result.value.get_text(), end="", flush=True)
    print()


async def example_async(client: OpenAI):
    print("\n=== Async iterator ===\n")
    async with client.astream_chats(build_query("Name three rivers")) as stream:
        async for result in stream:
            if result.is_success:
                print(result.value.get_text(), end="", flush=True)
    print()


def main():
    with OpenAI() as client:
        example_callbacks(client)
        example_iterator(client)
        asyncio.run(example_async(client))


if __name__ == "__main__":
    main()
