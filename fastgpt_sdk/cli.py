"""
FastGPT CLI – Command line interface for FastGPT.

Usage:
    fastgpt chat "What can you do?"
    fastgpt chat
    fastgpt histories APP_ID
    fastgpt datasets
    fastgpt collections DATASET_ID
    fastgpt search DATASET_ID "refund policy"
    fastgpt stats APP_ID
    fastgpt config --url https://cloud.fastgpt.cn --key fastgpt-...
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path

from dotenv import load_dotenv

from fastgpt_sdk import (
    AuthenticationError,
    ChatRequest,
    FastGPTClient,
    FastGPTError,
    Message,
    RateLimitError,
)
from fastgpt_sdk.models import (
    CollectionListRequest,
    FlowNodeStatusEvent,
    GetHistoriesRequest,
    SearchTestRequest,
)


# ═══════════════════════════════════════════════════════════
# CONFIG
# ═══════════════════════════════════════════════════════════

_CONFIG_DIR = Path.home() / ".fastgpt"
_CONFIG_FILE = _CONFIG_DIR / "config.json"


def _load_config() -> dict:
    if _CONFIG_FILE.exists():
        return json.loads(_CONFIG_FILE.read_text())
    return {}


def _save_config(config: dict):
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(json.dumps(config, indent=2))
    _CONFIG_FILE.chmod(0o600)  # Owner-only read/write


def _get_client(args) -> FastGPTClient:
    """Build a FastGPTClient from environment (.env included) or the config file."""
    load_dotenv()
    config = _load_config()

    url = os.environ.get("FASTGPT_BASE_URL") or config.get("url")
    api_key = os.environ.get("FASTGPT_API_KEY") or config.get("api_key")

    if not url:
        print("❌ No FastGPT URL configured.")
        print("   Run: fastgpt config --url https://cloud.fastgpt.cn --key YOUR_KEY")
        print("   Or set: export FASTGPT_BASE_URL=... and export FASTGPT_API_KEY=...")
        sys.exit(1)

    if not api_key:
        print("❌ No API key configured.")
        print("   Run: fastgpt config --key YOUR_KEY")
        sys.exit(1)

    if "FASTGPT_TIMEOUT" in os.environ:
        timeout = float(os.environ["FASTGPT_TIMEOUT"])
    else:
        timeout = config.get("timeout", 30)

    return FastGPTClient(
        base_url=url,
        api_key=api_key,
        timeout=timeout,
        verify_ssl=config.get("verify_ssl", True),
        debug=args.debug,
    )


# ═══════════════════════════════════════════════════════════
# COLORS (ANSI)
# ═══════════════════════════════════════════════════════════

class _C:
    """ANSI color codes – disabled if not a TTY."""
    _enabled = sys.stdout.isatty()

    BOLD = "\033[1m" if _enabled else ""
    DIM = "\033[2m" if _enabled else ""
    GREEN = "\033[32m" if _enabled else ""
    YELLOW = "\033[33m" if _enabled else ""
    CYAN = "\033[36m" if _enabled else ""
    RED = "\033[31m" if _enabled else ""
    RESET = "\033[0m" if _enabled else ""


# ═══════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════

def cmd_config(args):
    """Configure FastGPT connection."""
    config = _load_config()

    if args.url:
        config["url"] = args.url.rstrip("/")
    if args.key:
        config["api_key"] = args.key
    if args.timeout:
        config["timeout"] = args.timeout
    if args.no_ssl:
        config["verify_ssl"] = False
    if args.ssl:
        config["verify_ssl"] = True

    if args.url or args.key or args.timeout or args.no_ssl or args.ssl:
        _save_config(config)
        print(f"✅ Config saved to {_CONFIG_FILE}")

    config = _load_config()
    if config:
        print(f"\n{_C.BOLD}Current configuration:{_C.RESET}")
        print(f"  URL:     {config.get('url', '(not set)')}")
        key = config.get("api_key", "")
        print(f"  API Key: {key[:12] + '...' if key else '(not set)'}")
        print(f"  Timeout: {config.get('timeout', 30)}s")
        print(f"  SSL:     {config.get('verify_ssl', True)}")
    else:
        print("No configuration found.")


def _stream_answer(client: FastGPTClient, request: ChatRequest, show_nodes: bool) -> str:
    """Print a streamed answer as it arrives and return the full text."""
    parts = []
    for event in client.chat.stream(request):
        if event.is_answer:
            print(event.content, end="", flush=True)
            parts.append(event.content)
        elif show_nodes and isinstance(event.data, FlowNodeStatusEvent):
            print(f"{_C.DIM}  ⚙ {event.data.name} ({event.data.status}){_C.RESET}")
        elif event.is_error:
            print(f"\n{_C.RED}❌ {event.raw}{_C.RESET}")
    print()
    return "".join(parts)


def _parse_variables(raw):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"{_C.RED}❌ --variables is not valid JSON: {e}{_C.RESET}")
        sys.exit(1)


def _build_request(text: str, chat_id, args) -> ChatRequest:
    # detail=True keeps event names on the stream; --detail only controls printing
    return ChatRequest(
        chat_id=chat_id,
        detail=True,
        variables=_parse_variables(args.variables),
        messages=[Message(role="user", content=text)],
    )


def cmd_chat(args):
    """Send one message, or start an interactive session when none is given."""
    _parse_variables(args.variables)
    text = " ".join(args.message)
    chat_id = args.chat_id

    if text:
        with _get_client(args) as client:
            try:
                _stream_answer(client, _build_request(text, chat_id, args), args.detail)
            except AuthenticationError:
                print(f"{_C.RED}❌ Authentication failed. Check your key with: fastgpt config{_C.RESET}")
                sys.exit(1)
            except RateLimitError as e:
                print(f"{_C.YELLOW}⏳ Rate limited. Retry in {e.retry_after}s{_C.RESET}")
                sys.exit(1)
            except FastGPTError as e:
                print(f"{_C.RED}❌ Error: {e}{_C.RESET}")
                sys.exit(1)
        return

    client = _get_client(args)
    chat_id = chat_id or uuid.uuid4().hex

    print(f"{_C.BOLD}💬 FastGPT Interactive Chat{_C.RESET}")
    print(f"{_C.DIM}   Commands: /quit  /new  /id  /help{_C.RESET}")
    print()

    try:
        while True:
            try:
                user_input = input(f"{_C.CYAN}You:{_C.RESET} ").strip()
            except (KeyboardInterrupt, EOFError):
                break

            if not user_input:
                continue

            if user_input.startswith("/"):
                cmd = user_input.lower().split()[0]
                if cmd in ("/quit", "/exit", "/q"):
                    break
                elif cmd == "/new":
                    chat_id = uuid.uuid4().hex
                    print(f"{_C.DIM}  ↻ New conversation{_C.RESET}")
                elif cmd == "/id":
                    print(f"{_C.DIM}  Chat ID: {chat_id}{_C.RESET}")
                elif cmd == "/help":
                    print(f"{_C.DIM}  /quit    Exit chat")
                    print("  /new     Start new conversation")
                    print(f"  /id      Show chat ID{_C.RESET}")
                else:
                    print(f"{_C.DIM}  Unknown command. Type /help{_C.RESET}")
                continue

            try:
                t0 = time.time()
                print(f"\n{_C.BOLD}FastGPT:{_C.RESET} ", end="")
                _stream_answer(client, _build_request(user_input, chat_id, args), args.detail)
                print(f"{_C.DIM}  [{time.time() - t0:.1f}s]{_C.RESET}\n")
            except RateLimitError as e:
                print(f"\n{_C.YELLOW}⏳ Rate limited. Wait {e.retry_after}s{_C.RESET}\n")
                time.sleep(e.retry_after)
            except FastGPTError as e:
                print(f"\n{_C.RED}❌ {e}{_C.RESET}\n")

    finally:
        client.close()
        print(f"\n{_C.DIM}Chat ID: {chat_id}{_C.RESET}")
        print(f"{_C.DIM}👋 Bye{_C.RESET}")


def cmd_histories(args):
    """List recent conversations of an app."""
    with _get_client(args) as client:
        page = client.chat.get_histories(
            GetHistoriesRequest(app_id=args.app_id, page_size=args.limit)
        )
        if not page.list:
            print("No conversations found.")
            return

        print(f"{_C.BOLD}Conversations ({len(page.list)}/{page.total}):{_C.RESET}")
        for h in page.list:
            pin = "📌" if h.top else "💬"
            date = (h.update_time or "")[:10]
            print(f"  {pin} {_C.DIM}{h.chat_id}{_C.RESET} {h.display_title or '(untitled)'} {_C.DIM}{date}{_C.RESET}")


def cmd_datasets(args):
    """List datasets."""
    with _get_client(args) as client:
        datasets = client.dataset.get_dataset_list(args.parent)
        print(f"{_C.BOLD}Datasets ({len(datasets)}):{_C.RESET}")
        for d in datasets:
            icon = "📁" if d.is_folder else "📚"
            print(f"  {icon} {_C.DIM}{d.id}{_C.RESET} {d.name} {_C.DIM}{d.intro}{_C.RESET}")


def cmd_collections(args):
    """List the collections of a dataset."""
    with _get_client(args) as client:
        page = client.dataset.get_collection_list(
            CollectionListRequest(
                dataset_id=args.dataset_id,
                page_size=args.limit,
                search_text=args.search,
            )
        )
        print(f"{_C.BOLD}Collections ({len(page.list)}/{page.total}):{_C.RESET}")
        for c in page.list:
            state = f"{_C.RED}forbidden{_C.RESET}" if c.forbid else f"{c.data_amount} items"
            print(f"  📄 {_C.DIM}{c.id}{_C.RESET} {c.name} {_C.DIM}({c.type}, {state}{_C.DIM}){_C.RESET}")


def cmd_search(args):
    """Run a retrieval test against a dataset."""
    with _get_client(args) as client:
        results = client.dataset.search_test(
            SearchTestRequest(
                dataset_id=args.dataset_id,
                text=" ".join(args.text),
                limit=args.limit,
                search_mode=args.mode,
                using_re_rank=args.rerank,
            )
        )
        if not results:
            print("No matches.")
            return

        for i, r in enumerate(results, 1):
            print(f"{_C.BOLD}{i}. {r.source_name}{_C.RESET} {_C.DIM}{r.score}{_C.RESET}")
            print(f"   {r.q[:200]}")
            if r.a:
                print(f"   {_C.DIM}{r.a[:200]}{_C.RESET}")


def cmd_stats(args):
    """Show cumulative usage of an app."""
    with _get_client(args) as client:
        total = client.app.get_total_data(args.app_id)
        print(f"{_C.BOLD}App {args.app_id}:{_C.RESET}")
        print(f"  👥 Users:  {total.total_users}")
        print(f"  💬 Chats:  {total.total_chats}")
        print(f"  💰 Points: {total.total_points}")


# ═══════════════════════════════════════════════════════════
# MAIN
# ═══════════════════════════════════════════════════════════

def main():
    parser = argparse.ArgumentParser(
        prog="fastgpt",
        description="FastGPT CLI – Interact with FastGPT from the command line",
    )
    parser.add_argument("--debug", action="store_true", help="Log HTTP traffic")
    sub = parser.add_subparsers(dest="command", help="Available commands")

    # ── config ──
    p = sub.add_parser("config", help="Configure FastGPT connection")
    p.add_argument("--url", help="FastGPT server URL")
    p.add_argument("--key", help="API key")
    p.add_argument("--timeout", type=int, help="Request timeout in seconds")
    p.add_argument("--no-ssl", action="store_true", help="Disable SSL verification")
    p.add_argument("--ssl", action="store_true", help="Enable SSL verification")
    p.set_defaults(func=cmd_config)

    # ── chat ──
    p = sub.add_parser("chat", help="Chat with the app bound to the API key")
    p.add_argument("message", nargs="*", help="Message (omit for interactive mode)")
    p.add_argument("-c", "--chat-id", help="Continue a conversation (chat ID)")
    p.add_argument("--detail", action="store_true", help="Show workflow node progress")
    p.add_argument("--variables", help="Workflow variables as JSON")
    p.set_defaults(func=cmd_chat)

    # ── histories ──
    p = sub.add_parser("histories", help="List conversations")
    p.add_argument("app_id", help="App ID")
    p.add_argument("-n", "--limit", type=int, default=20, help="Max items (default: 20)")
    p.set_defaults(func=cmd_histories)

    # ── datasets ──
    p = sub.add_parser("datasets", help="List datasets")
    p.add_argument("--parent", help="Folder ID (default: root)")
    p.set_defaults(func=cmd_datasets)

    # ── collections ──
    p = sub.add_parser("collections", help="List collections of a dataset")
    p.add_argument("dataset_id", help="Dataset ID")
    p.add_argument("-n", "--limit", type=int, default=30, help="Max items (default: 30)")
    p.add_argument("-s", "--search", help="Filter by name")
    p.set_defaults(func=cmd_collections)

    # ── search ──
    p = sub.add_parser("search", help="Run a search test on a dataset")
    p.add_argument("dataset_id", help="Dataset ID")
    p.add_argument("text", nargs="+", help="Query text")
    p.add_argument("--mode", default="embedding",
                   choices=["embedding", "fullTextRecall", "mixedRecall"])
    p.add_argument("--limit", type=int, default=5000, help="Max tokens (default: 5000)")
    p.add_argument("--rerank", action="store_true", help="Use re-ranking")
    p.set_defaults(func=cmd_search)

    # ── stats ──
    p = sub.add_parser("stats", help="Show app usage totals")
    p.add_argument("app_id", help="App ID")
    p.set_defaults(func=cmd_stats)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    try:
        args.func(args)
    except FastGPTError as e:
        print(f"{_C.RED}❌ {e}{_C.RESET}")
        sys.exit(1)


if __name__ == "__main__":
    main()
