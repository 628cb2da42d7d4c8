"""CLI entry point for the OpenAI HTTP SDK."""

import argparse
import logging
import sys
from concurrent.futures import Future
from typing import Optional

from .client import OpenAI
from .config import Configuration
from .models.conversation_types import ChatMessage, ChatRole
from .models.queries import ChatQuery


def chat(client: OpenAI, model: str, prompt: str, max_tokens: Optional[int] = None,
         temperature: Optional[float] = None, stream: bool = False) -> int:
    """Send one user message and print the reply."""
    query = ChatQuery(
        model=model,
        messages=[ChatMessage(role=ChatRole.USER, content=prompt)],
        max_tokens=max_tokens,
        temperature=temperature
    )

    if stream:
        try:
            with client.stream_chats(query) as results:
                for result in results:
                    if result.is_success:
                        print(result.value.get_text(), end='', flush=True)
                    else:
                        print(f"\n[skipped event: {result.error}]", file=sys.stderr)
        except Exception as e:
            print(f"\nError: {e}", file=sys.stderr)
            return 1
        print()
        return 0

    future: Future = Future()
    client.chats(query, future.set_result)
    result = future.result()
    if not result.is_success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    for choice in result.value.choices:
        print(choice.message.content)
    if result.value.usage:
        print(f"\nTokens used: {result.value.usage.total_tokens}")
    return 0


def list_models(client: OpenAI) -> int:
    """Print available model ids."""
    future: Future = Future()
    client.models(future.set_result)
    result = future.result()
    if not result.is_success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print("Available Models:")
    print("-" * 50)
    for model in sorted(result.value.data, key=lambda m: m.id):
        print(f"{model.id} ({model.owned_by})")
    return 0


def main(argv=None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="OpenAI HTTP SDK CLI")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    chat_parser = subparsers.add_parser('chat', help='Send a chat message')
    chat_parser.add_argument('prompt', help='User message')
    chat_parser.add_argument('--model', default='gpt-4o-mini', help='Model to use')
    chat_parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')
    chat_parser.add_argument('--temperature', type=float, help='Sampling temperature')
    chat_parser.add_argument('--stream', action='store_true', help='Stream the response')

    subparsers.add_parser('models', help='List available models')

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    with OpenAI(configuration=Configuration.from_env()) as client:
        if args.command == 'chat':
            return chat(client, args.model, args.prompt, args.max_tokens, args.temperature, args.stream)
        return list_models(client)


if __name__ == "__main__":
    sys.exit(main())
