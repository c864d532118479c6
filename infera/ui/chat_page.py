"""NiceGUI chat interface backed by the conversation controller."""

import asyncio
from collections.abc import Callable

from nicegui import background_tasks, ui

from infera.chat.config import get_chat_config
from infera.chat.controller import ConversationController
from infera.chat.transport import get_transport
from infera.models.schemas import Message
from infera.ui.clipboard import COPY_CONFIRMATION_SECONDS, BrowserClipboard, Clipboard
from infera.ui.markdown import code_block_key, escape_html, markdown_to_html, split_code_blocks


CUSTOM_CSS = """
<style>
    body { background: #111827; color: #e5e7eb; }

    .sidebar { background: #030712; }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 12px 12px 0 12px;
    }

    .message-bot {
        background: #374151;
        color: #f3f4f6;
        border-radius: 12px 12px 12px 0;
    }

    .bot-name { color: #818cf8; font-weight: 700; }

    .code-block pre {
        background: #1a202c;
        color: #e2e8f0;
        border-radius: 6px;
        padding: 0.5rem;
        overflow-x: auto;
        font-size: 0.875rem;
    }
    .code-block .copy-btn { opacity: 0; transition: opacity 0.2s; }
    .code-block:hover .copy-btn { opacity: 1; }

    .message-bot code, .message-user code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-bot a { color: #a5b4fc; }
</style>
"""


def render_text(text: str) -> None:
    """Render prose without code blocks."""
    ui.html(markdown_to_html(text), sanitize=False).classes("text-sm leading-relaxed")


def render_code_block(
    code: str,
    key: str,
    controller: ConversationController,
    on_copy: Callable[[str, str], None],
) -> None:
    copied = controller.is_copied(key)
    with ui.element("div").classes("relative code-block w-full"):
        ui.html(f"<pre><code>{escape_html(code)}</code></pre>", sanitize=False)
        ui.button(
            icon="check" if copied else "content_copy",
            on_click=lambda: on_copy(code, key),
        ).props("flat dense size=sm").mark("copy").classes(
            "copy-btn absolute top-2 right-2 bg-gray-600 text-gray-200"
        ).tooltip("Copied!" if copied else "Copy code")


def render_message(
    msg: Message,
    controller: ConversationController,
    on_copy: Callable[[str, str], None],
) -> None:
    align = "justify-end" if msg.is_user else "justify-start"
    bubble = "message-user" if msg.is_user else "message-bot"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes(f"p-3 shadow-sm max-w-[80%] gap-1 {bubble}"):
            if not msg.is_user:
                ui.label(f"{msg.sender}:").classes("bot-name")
            code_index = 0
            for segment in split_code_blocks(msg.text):
                if segment.is_code:
                    key = code_block_key(msg.id, code_index)
                    render_code_block(segment.text, key, controller, on_copy)
                    code_index += 1
                else:
                    render_text(segment.text)


def render_typing_indicator(bot_name: str) -> None:
    with ui.row().classes("w-full justify-start"):
        with ui.element("div").classes("message-bot p-3 max-w-[80%] shadow-sm animate-pulse"):
            ui.html(
                f'<span class="bot-name">{escape_html(bot_name)}:</span> Typing...',
                sanitize=False,
            )


def build_chat_page(
    controller: ConversationController, clipboard: Clipboard | None = None
) -> None:
    """Lay out the page for one controller and wire its intents."""
    ui.add_head_html(CUSTOM_CSS)
    ui.dark_mode().enable()
    clipboard = clipboard or BrowserClipboard()
    config = controller.config
    conversation = controller.conversation

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button

    async def clear_copied_later(key: str) -> None:
        await asyncio.sleep(COPY_CONFIRMATION_SECONDS)
        controller.clear_copied(key)

    def copy_code(code: str, key: str) -> None:
        if not clipboard.copy(code):
            return
        controller.mark_copied(key)
        # Outlives the code block, which every refresh rebuilds
        background_tasks.create(clear_copied_later(key), name="clear copy confirmation")

    def refresh() -> None:
        messages_container.clear()
        with messages_container:
            for msg in conversation.messages:
                render_message(msg, controller, copy_code)
            if conversation.is_awaiting_reply:
                render_typing_indicator(controller.bot_name)
        if input_field.value != conversation.pending_input:
            input_field.value = conversation.pending_input
        input_field.set_enabled(not conversation.is_awaiting_reply)
        send_btn.set_enabled(not conversation.is_awaiting_reply)
        scroll_area.scroll_to(percent=1.0)

    async def send_message() -> None:
        await controller.submit()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        # Sidebar
        with ui.column().classes("sidebar w-64 h-full p-4 text-white shadow-lg"):
            ui.label(f"{config.bot_name} Web UI").classes("text-2xl font-bold")
            ui.label("Powered by Gemini AI").classes("text-gray-400 text-sm mb-4")
            ui.button(
                "New Chat", icon="add_circle", on_click=controller.reset_conversation
            ).classes("w-full bg-indigo-600 font-semibold").mark("new-chat")
            ui.space()
            with ui.column().classes("w-full pt-6 border-t border-gray-700 text-sm gap-1"):
                ui.label(f"Model: {config.model_name}").classes("text-gray-400")
                ui.label(f"Version: {config.app_version}").classes("text-gray-400")

        # Main chat area
        with ui.column().classes("flex-1 h-full p-4 md:p-6 bg-gray-800"):
            with ui.scroll_area().classes("flex-grow w-full") as scroll_area:
                messages_container = ui.column().classes("w-full gap-4")

            with ui.row().classes("w-full pt-4 border-t border-gray-700 items-center gap-3"):
                input_field = (
                    ui.input(
                        placeholder="Type your message...",
                        on_change=lambda e: controller.update_draft(e.value or ""),
                    )
                    .props("rounded outlined dark dense")
                    .classes("flex-grow")
                    .mark("draft")
                    .on("keydown.enter", send_message)
                )
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round color=indigo")
                    .mark("send")
                )

    controller.on_change(refresh)
    refresh()


@ui.page("/")
def chat_page() -> None:
    """Main chat page; each browser tab gets its own conversation."""
    controller = ConversationController(get_chat_config(), get_transport())
    build_chat_page(controller)
