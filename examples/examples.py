"""
FastGPT SDK – Usage Examples
============================

Chat examples use the /api/v1/chat/completions endpoint with an app key.
Dataset examples need a key with knowledge base access.
Set FASTGPT_BASE_URL, FASTGPT_API_KEY and FASTGPT_APP_ID in .env.
"""

import asyncio
import os
import uuid

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
    AppChartDataRequest,
    CollectionCreateTextRequest,
    CreateQuestionGuideRequest,
    DatasetCreateRequest,
    GetHistoriesRequest,
    SearchTestRequest,
)


# ══════════════════════════════════════════════════════════
# CONFIGURATION
# ══════════════════════════════════════════════════════════
load_dotenv()

BASE_URL = os.getenv("FASTGPT_BASE_URL")
API_KEY = os.getenv("FASTGPT_API_KEY")
APP_ID = os.getenv("FASTGPT_APP_ID", "")

if not BASE_URL or not API_KEY:
    raise RuntimeError(
        "Missing FASTGPT_BASE_URL or FASTGPT_API_KEY. "
        "Define them in .env or environment variables."
    )

# ─────────────────────────────────────────────────────────
# 1. STREAMING CHAT
# ─────────────────────────────────────────────────────────

def example_stream():
    """Print the answer as it is generated."""

    with FastGPTClient(base_url=BASE_URL, api_key=API_KEY) as client:

        request = ChatRequest(
            chat_id=str(uuid.uuid4()),
            detail=True,
            messages=[Message(role="user", content="What can you help me with?")],
        )

        for event in client.chat.stream(request):
            if event.is_answer:
                print(event.content, end="", flush=True)
            elif event.event == "flowNodeStatus":
                print(f"\n⚙️  {event.data.name} ({event.data.status})")
            elif event.event == "flowResponses":
                total = sum(r.total_points for r in event.data.responses)
                print(f"\n💰 Points: {total:.4f}")
            elif event.is_done:
                print("\n✅ Done")


# ─────────────────────────────────────────────────────────
# 2. CALLBACK STYLE
# ─────────────────────────────────────────────────────────

def example_callback():
    """Handle every event through one function. Raising stops the stream."""

    answer = []

    def on_event(name, data):
        if name in ("answer", "fastAnswer") and data != "[DONE]":
            answer.append(data.content)
        elif name == "error":
            raise RuntimeError(f"Workflow error: {data}")

    with FastGPTClient(base_url=BASE_URL, api_key=API_KEY) as client:
        # detail=True makes FastGPT tag each frame with its event name
        request = ChatRequest(
            detail=True,
            messages=[Message(role="user", content="Summarise our refund policy")],
        )
        client.chat.chat(request, on_event)

    print(f"✅ Answer: {''.join(answer)}")


# ─────────────────────────────────────────────────────────
# 3. CONVERSATION CONTINUITY
# ─────────────────────────────────────────────────────────

def example_conversation():
    """Reuse chat_id so FastGPT keeps the context server-side."""

    chat_id = str(uuid.uuid4())

    with FastGPTClient(base_url=BASE_URL, api_key=API_KEY) as client:

        first = client.chat.create_completion(ChatRequest(
            chat_id=chat_id,
            messages=[Message(role="user", content="My name is Ada.")],
        ))
        print(f"🤖 {first.text}")

        second = client.chat.create_completion(ChatRequest(
            chat_id=chat_id,
            messages=[Message(role="user", content="What is my name?")],
        ))
        print(f"🤖 {second.text}")
        print(f"📊 Tokens: {second.usage.total_tokens}")

        if APP_ID:
            guide = client.chat.create_question_guide(
                CreateQuestionGuideRequest(app_id=APP_ID, chat_id=chat_id)
            )
            for q in guide.questions:
                print(f"   💡 {q}")


# ─────────────────────────────────────────────────────────
# 4. ERROR HANDLING
# ─────────────────────────────────────────────────────────

def example_error_handling():
    """Map SDK exceptions to user-facing messages."""

    with FastGPTClient(base_url=BASE_URL, api_key=API_KEY, timeout=120.0) as client:
        try:
            completion = client.chat.create_completion(ChatRequest(
                messages=[Message(role="user", content="Hello")],
            ))
            print(f"✅ {completion.text[:200]}")
            return completion

        except AuthenticationError:
            print("❌ API key invalid or expired.")

        except RateLimitError as e:
            print(f"⏳ Rate limited. Retry in {e.retry_after}s")

        except FastGPTError as e:
            print(f"💥 Error [{e.status_code}]: {e.message}")

    return None


# ─────────────────────────────────────────────────────────
# 5. CHAT HISTORY & STATISTICS
# ─────────────────────────────────────────────────────────

def example_history():
    """List recent conversations and the app's usage totals."""

    if not APP_ID:
        print("⚠️ Set FASTGPT_APP_ID to run this example")
        return

    with FastGPTClient(base_url=BASE_URL, api_key=API_KEY) as client:

        page = client.chat.get_histories(GetHistoriesRequest(app_id=APP_ID, page_size=10))
        print(f"💬 {page.total} conversations")
        for h in page.list:
            pin = "📌 " if h.top else ""
            print(f"   • {pin}{h.display_title} ({h.chat_id})")

        total = client.app.get_total_data(APP_ID)
        print(f"\n👥 Users: {total.total_users} | Chats: {total.total_chats} | Points: {total.total_points:.2f}")

        chart = client.app.get_chart_data(AppChartDataRequest(
            app_id=APP_ID,
            date_start="2025-09-01T00:00:00.000Z",
            date_end="2025-09-30T23:59:59.999Z",
        ))
        for day in chart.chat_data:
            print(f"   {day.timestamp}: {day.summary.chat_count} chats, {day.summary.error_count} errors")


# ─────────────────────────────────────────────────────────
# 6. KNOWLEDGE BASE (async)
# ─────────────────────────────────────────────────────────

async def example_knowledge_base():
    """Create a dataset, add a text collection and run a search test."""

    async with FastGPTClient(base_url=BASE_URL, api_key=API_KEY) as client:

        dataset_id = await client.dataset.acreate_dataset(
            DatasetCreateRequest(name="SDK demo", intro="Created by examples.py")
        )
        print(f"📚 Dataset: {dataset_id}")

        result = await client.dataset.acreate_text_collection(CollectionCreateTextRequest(
            dataset_id=dataset_id,
            name="refunds.txt",
            text="Refunds are accepted within 30 days of purchase with a receipt.",
        ))
        print(f"📄 Collection: {result.collection_id} ({result.results.insert_len} chunks)")

        hits = await client.dataset.asearch_test(
            SearchTestRequest(dataset_id=dataset_id, text="How long do I have to return an item?")
        )
        for hit in hits:
            print(f"   🔎 {hit.score} {hit.q[:80]}")

        await client.dataset.adelete_dataset(dataset_id)
        print("🗑️  Dataset deleted")


# ═══════════════════════════════════════════════════════════
# MAIN
# ═══════════════════════════════════════════════════════════

if __name__ == "__main__":
    print("=" * 70)
    print("FastGPT SDK Examples")
    print("=" * 70)

    # ── Sync examples ──
    example_stream()
    # example_callback()
    # example_conversation()
    # example_error_handling()
    # example_history()

    # ── Async example ──
    # asyncio.run(example_knowledge_base())
