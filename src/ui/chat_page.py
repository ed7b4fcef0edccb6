"""NiceGUI chat widget driven by ChatSessionController."""

import os

from nicegui import app, ui

from src.chat.config import ClientConfig, get_client_config
from src.chat.controller import ChatSessionController
from src.chat.gateway_client import GatewayClient
from src.chat.models import SessionState
from src.chat.projection import ItemKind, RenderItem, project

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .chat-panel {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 16px;
        box-shadow: 0 25px 50px -12px rgba(0, 0, 0, 0.25);
        overflow: hidden;
        width: 420px;
        max-width: calc(100vw - 2rem);
        height: 600px;
        max-height: 90vh;
        z-index: 50;
    }

    .header { background: #1f2937; }

    .message-user {
        background: #1f2937;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-bot {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 18px 18px 18px 4px;
    }

    .spotlight {
        background: linear-gradient(90deg, #eff6ff 0%, #eef2ff 100%);
        border: 1px solid #bfdbfe;
        border-radius: 12px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #9ca3af;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.1s; }
    .typing-dot:nth-child(3) { animation-delay: 0.2s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #9ca3af; }

    .send-btn { background: #1f2937 !important; }

    .launcher { z-index: 50; }
</style>
"""


def register_chat_page(gateway: GatewayClient, config: ClientConfig | None = None) -> None:
    """Register the chat widget page at "/".

    Args:
        gateway: Process-wide gateway client shared by every session.
        config: Optional client configuration (greeting text).
    """
    config = config or get_client_config()

    @ui.page("/")
    def chat_page() -> None:
        """Landing page with the floating chat launcher."""
        ui.add_head_html(CUSTOM_CSS)

        controller: ChatSessionController | None = None
        rendered: tuple[int, bool] | None = None

        messages_container: ui.column
        scroll_area: ui.scroll_area
        input_field: ui.input
        send_btn: ui.button

        def render_welcome(item: RenderItem) -> None:
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("message-bot px-5 py-4 max-w-[85%]"):
                    ui.label(item.text).classes("font-semibold text-gray-800 mb-2")
                    ui.label(
                        "I'm here to provide intelligent assistance and guidance."
                    ).classes("text-sm text-gray-600 mb-3")
                    with ui.element("div").classes("spotlight p-3"):
                        with ui.row().classes("items-center gap-2 text-blue-700 mb-1"):
                            ui.icon("bolt")
                            ui.label("AI Spotlight").classes("font-semibold text-sm")
                        ui.label(
                            "I can help you with various tasks and provide intelligent "
                            "assistance across multiple domains!"
                        ).classes("text-sm text-blue-600")

        def render_message(item: RenderItem) -> None:
            align = "justify-end" if item.align_end else "justify-start"
            bubble = "message-user" if item.kind is ItemKind.USER else "message-bot"

            with ui.row().classes(f"w-full {align}"):
                with ui.column().classes("max-w-[80%] gap-1"):
                    with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                        ui.label(item.text).classes(
                            "text-sm leading-relaxed whitespace-pre-wrap"
                        )
                    ui.label(item.time).classes(
                        f"text-[10px] text-gray-400 {'self-end' if item.align_end else 'self-start'}"
                    )

        def render_typing() -> None:
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("message-bot px-4 py-3"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")

        def render_item(item: RenderItem) -> None:
            if item.kind is ItemKind.WELCOME:
                render_welcome(item)
            elif item.kind is ItemKind.TYPING:
                render_typing()
            else:
                render_message(item)

        def refresh(state: SessionState) -> None:
            nonlocal rendered
            signature = (len(state.messages), state.pending)
            if signature != rendered:
                rendered = signature
                messages_container.clear()
                with messages_container:
                    for item in project(state):
                        render_item(item)
                scroll_area.scroll_to(percent=1.0)

            if input_field.value != state.draft_text:
                input_field.value = state.draft_text
            send_btn.set_enabled(controller is not None and controller.can_submit())

        def on_draft_change(value: str | None) -> None:
            if controller is not None:
                controller.update_draft(value or "")

        def send_message() -> None:
            if controller is not None:
                controller.submit(input_field.value or "")

        def open_panel() -> None:
            nonlocal controller, rendered
            controller = ChatSessionController(gateway, greeting=config.greeting)
            controller.subscribe(refresh)
            rendered = None
            refresh(controller.state)
            launcher.set_visibility(False)
            panel.set_visibility(True)

        def dispose_session() -> None:
            nonlocal controller
            if controller is not None:
                controller.close()
                controller = None

        def close_panel() -> None:
            dispose_session()
            panel.set_visibility(False)
            launcher.set_visibility(True)

        # === UI Layout ===
        launcher = (
            ui.button(icon="chat", on_click=open_panel)
            .props("round unelevated size=lg color=white text-color=grey-8")
            .classes("fixed bottom-6 right-6 shadow-2xl launcher")
        )

        with ui.column().classes("chat-panel fixed bottom-4 right-4 gap-0") as panel:
            # Header
            with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
                with ui.column().classes("gap-0"):
                    ui.label("Alith AI").classes("text-lg font-bold text-white")
                    ui.label("AI Assistant").classes("text-xs text-gray-300")
                ui.button(icon="close", on_click=close_panel).props("flat round color=white")

            # Messages
            with (
                ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area,
                ui.column().classes("w-full p-4"),
            ):
                messages_container = ui.column().classes("w-full gap-3")

            # Input
            with ui.row().classes("w-full p-4 gap-3 items-center bg-white border-t"):
                with ui.element("div").classes("flex-grow input-box px-3"):
                    input_field = (
                        ui.input(
                            placeholder="Type your message...",
                            on_change=lambda e: on_draft_change(e.value),
                        )
                        .props("borderless dense")
                        .classes("w-full")
                        .on("keydown.enter.prevent", send_message)
                    )
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn")
                )
                send_btn.disable()

        panel.set_visibility(False)
        ui.context.client.on_disconnect(dispose_session)


def main() -> None:
    """Run the chat UI on its own server (RUN_MODE=separate)."""
    config = get_client_config()
    gateway = GatewayClient(config)
    register_chat_page(gateway, config)
    app.on_shutdown(gateway.aclose)
    ui.run(
        title="Alith AI",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
    )


if __name__ == "__main__":
    main()
