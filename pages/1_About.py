# pages/1_About.py

import streamlit as st


FEATURES = [
    ("🤖", "AI Chat", "Conversational AI with multiple model support including GPT-4, Claude, and more."),
    ("🎨", "Image Generation", "Create stunning images from text descriptions using advanced AI models."),
    ("🎙️", "Voice Synthesis", "Convert text to natural-sounding speech with various voice options."),
]

VALUES = [
    ("👥", "User-Focused", "Designed with simplicity and ease of use in mind."),
    ("🎯", "Innovation", "Leveraging cutting-edge AI technology for the best results."),
    ("⚡", "Speed", "Fast and responsive AI interactions for seamless experience."),
    ("🛡️", "Reliability", "Built with robust error handling and fallback mechanisms."),
]


def _render_cards(items):
    cols = st.columns(len(items))
    for col, (icon, title, description) in zip(cols, items):
        with col:
            st.markdown(f"#### {icon} {title}")
            st.caption(description)


def main():
    st.set_page_config(
        page_title="About – Kuweni AI",
        layout="wide",
        page_icon="ℹ️",
    )

    st.page_link("app.py", label="Back to chat", icon="⬅️")
    st.title("ℹ️ About Kuweni AI")
    st.write(
        "Kuweni AI brings chat, image generation and text-to-speech together in one place. "
        "Conversations live in your browser tab only and are not stored anywhere."
    )

    st.divider()
    st.subheader("What you can do")
    _render_cards(FEATURES)

    st.divider()
    st.subheader("Our values")
    _render_cards(VALUES)


if __name__ == "__main__":
    main()
