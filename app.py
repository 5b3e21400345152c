# app.py
from typing import Optional

import streamlit as st

from kuweni.config import Config
from kuweni.controller import InteractionController, QueueNotifier
from kuweni.logging_config import setup_logging
from kuweni.model.catalog import IMAGE_MODELS, TEXT_MODELS, VOICES, option_index, option_name
from kuweni.model.chat import ChatSession, Message
from kuweni.service.gateway_client import get_gateway
from kuweni.store import SessionStore
from kuweni.utils import format_message_time


# =====================================================
# Per-browser-session state (lives in st.session_state)
# =====================================================

@st.cache_resource
def _init_logging() -> bool:
    setup_logging()
    return True


def get_controller() -> InteractionController:
    """
    Store + controller for this browser tab.

    Sessions are kept in memory only and disappear on reload.
    """
    if "controller" not in st.session_state:
        notifier = QueueNotifier()
        st.session_state.notifier = notifier
        st.session_state.controller = InteractionController(
            store=SessionStore(),
            gateway=get_gateway(),
            notifier=notifier,
        )
    return st.session_state.controller


def _flush_notifications():
    notifier: QueueNotifier = st.session_state.notifier
    for n in notifier.drain():
        icon = "⚠️" if n.variant == "destructive" else "✅"
        st.toast(f"**{n.title}**: {n.description}", icon=icon)


# =====================================================
# Callbacks
# =====================================================

def _new_chat():
    get_controller().new_session()


def _select_chat(session_id: str):
    get_controller().select_session(session_id)


def _ask_delete_chat(session_id: str):
    st.session_state.confirm_delete = session_id


def _confirm_delete_chat(session_id: str):
    get_controller().delete_session(session_id)
    st.session_state.confirm_delete = None


def _cancel_delete_chat():
    st.session_state.confirm_delete = None


def _copy_message(content: str):
    get_controller().copy_message(content)


def _delete_message(message_id: str):
    get_controller().delete_message(message_id)


def _prepare_download():
    st.session_state.image_download = get_controller().download_image()


# =====================================================
# Sidebar
# =====================================================

def _render_session_item(session: ChatSession, current_id: Optional[str]):
    is_current = session.id == current_id
    col_title, col_delete = st.columns([5, 1])

    with col_title:
        st.button(
            ("▶ " if is_current else "") + session.title,
            key=f"select_{session.id}",
            use_container_width=True,
            on_click=_select_chat,
            args=(session.id,),
        )
        st.caption(f"{len(session.messages)} messages")

    with col_delete:
        st.button("🗑️", key=f"delete_{session.id}", on_click=_ask_delete_chat, args=(session.id,))

    if st.session_state.get("confirm_delete") == session.id:
        st.warning("Are you sure you want to delete this entire chat session? This action cannot be undone.")
        col_yes, col_no = st.columns(2)
        col_yes.button("Delete", key=f"confirm_{session.id}", type="primary",
                       on_click=_confirm_delete_chat, args=(session.id,))
        col_no.button("Cancel", key=f"cancel_{session.id}", on_click=_cancel_delete_chat)


def _render_sidebar(controller: InteractionController):
    with st.sidebar:
        st.button("➕ New Chat", use_container_width=True, on_click=_new_chat)
        st.divider()

        snapshot = controller.store.snapshot
        if not snapshot.sessions:
            st.caption("No chats yet.")
        for session in snapshot.sessions:
            _render_session_item(session, snapshot.current_id)

        st.divider()
        st.markdown("### ⚙️ Settings")
        st.page_link("pages/1_About.py", label="About Us", icon="ℹ️")


# =====================================================
# Tabs
# =====================================================

def _render_message(message: Message):
    avatar = "🧑" if message.role == "user" else "🤖"
    with st.chat_message(message.role, avatar=avatar):
        st.markdown(message.content)
        col_time, col_copy, col_delete = st.columns([6, 1, 1])
        col_time.caption(format_message_time(message.timestamp))
        col_copy.button("📋", key=f"copy_{message.id}", help="Copy",
                        on_click=_copy_message, args=(message.content,))
        col_delete.button("🗑️", key=f"delmsg_{message.id}", help="Delete",
                          on_click=_delete_message, args=(message.id,))


def _render_chat_tab(controller: InteractionController):
    model = st.selectbox(
        "Model",
        options=[m.id for m in TEXT_MODELS],
        index=option_index(TEXT_MODELS, Config.ui.default_text_model),
        format_func=lambda x: option_name(TEXT_MODELS, x),
        key="text_model",
    )

    current = controller.store.current
    if current is None:
        st.info("👈 Start a new chat to begin the conversation.")
    else:
        for message in current.messages:
            _render_message(message)

    prompt = st.chat_input(
        "Type your message...",
        disabled=current is None or controller.chat_status.pending,
    )
    if prompt:
        with st.spinner("Thinking..."):
            controller.send_message(prompt, model)
        st.rerun()


def _render_image_result(controller: InteractionController):
    if controller.image_error:
        st.error(controller.image_error)
        return

    result = controller.image_result
    image = controller.image_data
    if result is None or image is None:
        return

    try:
        st.image(image.content, caption=result.source_prompt, use_container_width=True)
    except (OSError, ValueError) as e:
        controller.report_render_error(e)
        st.rerun()

    st.button("⬇️ Download Image", on_click=_prepare_download)
    payload = st.session_state.get("image_download")
    if payload is not None:
        st.download_button(
            "💾 Save file",
            data=payload.content,
            file_name=payload.filename,
            mime=payload.mime_type,
        )


def _render_image_tab(controller: InteractionController):
    prompt = st.text_area("Describe the image you want to generate", key="image_prompt")
    model = st.selectbox(
        "Image model",
        options=[m.id for m in IMAGE_MODELS],
        index=option_index(IMAGE_MODELS, Config.ui.default_image_model),
        format_func=lambda x: option_name(IMAGE_MODELS, x),
        key="image_model",
    )

    label = "🔁 Try Again" if controller.image_error else "🎨 Generate Image"
    if st.button(label, disabled=controller.image_status.pending or not prompt.strip()):
        st.session_state.image_download = None
        with st.spinner("Generating image..."):
            controller.generate_image(prompt, model)
        st.rerun()

    _render_image_result(controller)


def _render_voice_tab(controller: InteractionController):
    prompt = st.text_area("Text to Speech", key="voice_prompt")
    voice = st.selectbox(
        "Voice",
        options=[v.id for v in VOICES],
        index=option_index(VOICES, Config.ui.default_voice),
        format_func=lambda x: option_name(VOICES, x),
        key="voice_model",
    )

    if st.button("🎙️ Generate Voice", disabled=controller.voice_status.pending or not prompt.strip()):
        with st.spinner("Generating voice..."):
            controller.generate_voice(prompt, voice)
        st.rerun()

    if controller.voice_result is not None:
        st.audio(controller.voice_result.url)
        st.caption(f"Voice: {option_name(VOICES, controller.voice_result.model_or_voice)}")


# =====================================================
# Main UI
# =====================================================

def main():
    st.set_page_config(
        page_title="Kuweni AI",
        page_icon="🤖",
        layout="wide",
    )
    _init_logging()

    controller = get_controller()

    _render_sidebar(controller)

    st.title("🤖 Kuweni AI")

    tab_chat, tab_image, tab_voice = st.tabs(["💬 Chat", "🎨 Image", "🎙️ Voice"])
    with tab_chat:
        _render_chat_tab(controller)
    with tab_image:
        _render_image_tab(controller)
    with tab_voice:
        _render_voice_tab(controller)

    _flush_notifications()


if __name__ == "__main__":
    main()
