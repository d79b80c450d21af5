"""
Terminal client for a running askrelay server.

Architectural role:
- Sends questions to `POST /ask` and prints answers.
- Offers a one-shot mode (question on the command line) and an interactive loop.

Request lifecycle (per question):
1. Read a question from argv or stdin.
2. POST `{"question": ...}` to the relay.
3. Print `answer`, or the relay's error payload.

Input validation behavior:
- Empty input is ignored in interactive mode.

Error handling strategy:
- Connection failures print a short message and keep the loop alive.
- EOF and keyboard interrupts terminate the loop without traceback output.
"""

import argparse
import os
import sys

import requests

DEFAULT_TIMEOUT_SECONDS = 35


def default_base_url() -> str:
    return f"http://localhost:{os.getenv('PORT', '3000')}"


def ask(base_url: str, question: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """POST one question and return printable output.

    Returns the answer on success, otherwise `HTTP <status>: <error>`.

    Raises:
        requests.exceptions.RequestException: relay unreachable.
    """
    response = requests.post(
        f"{base_url.rstrip('/')}/ask",
        json={"question": question},
        timeout=timeout,
    )

    try:
        data = response.json()
    except ValueError:
        data = {}

    if response.status_code == 200 and isinstance(data, dict) and "answer" in data:
        return str(data["answer"])

    error = data.get("error") if isinstance(data, dict) else None
    detail = data.get("details") if isinstance(data, dict) else None
    message = error or response.text or response.reason
    if detail:
        message = f"{message} ({detail})"
    return f"HTTP {response.status_code}: {message}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ask questions through an askrelay server.")
    parser.add_argument("question", nargs="*", help="question to ask; omit for interactive mode")
    parser.add_argument("--url", default=default_base_url(), help="relay base URL")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.question:
        try:
            print(ask(args.url, " ".join(args.question)))
        except requests.exceptions.RequestException as err:
            print(f"Relay unreachable: {err}", file=sys.stderr)
            return 1
        return 0

    print(f"askrelay client connected to {args.url}. (Type 'exit' to quit)\n")

    while True:

        try:
            question = input("Question: ").strip()

        except EOFError:
            print()
            break

        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

        if not question:
            continue

        if question.lower() in ("exit", "quit"):
            break

        try:
            print("\n" + ask(args.url, question) + "\n")
        except requests.exceptions.RequestException as err:
            print(f"\nRelay unreachable: {err}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
