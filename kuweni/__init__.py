"""kuweni-ai: chat, image and voice generation behind one session-aware front end."""

__version__ = "0.1.0"
