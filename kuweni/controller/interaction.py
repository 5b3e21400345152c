# kuweni/controller/interaction.py

"""
Interaction Controller - 用户操作编排

每种操作（发送消息 / 生成图片 / 生成语音）各自维护状态：
    idle → pending → (success | failed)

success / failed 与 idle 一样可以再次触发；pending 期间再次触发会被忽略。聊天失败写入对话记录；图片和语音失败通过 notifier 提示。
任何异常（包括非 KuweniError）都在这里收口，状态不会停留在 pending。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from kuweni.config import Config
from kuweni.controller.notifier import LogNotifier, Notification, Notifier
from kuweni.errors import KuweniError, RenderError
from kuweni.model.chat import Message, assistant_message, user_message
from kuweni.model.generation import GenerationResult, ProxiedImage
from kuweni.service.gateway_client import Gateway, is_proxy_url
from kuweni.store.session_store import SessionStore
from kuweni.utils.clipboard import copy_to_clipboard
from kuweni.utils.downloads import DownloadPayload, build_download_filename, fetch_download

logger = logging.getLogger(__name__)

RENDER_ERROR_MESSAGE = "Failed to display the generated image. Please try generating again."


class ActionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ActionStatus:
    state: ActionState = ActionState.IDLE
    error: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self.state == ActionState.PENDING


def chat_error_text(error: Exception) -> str:
    message = error.message if isinstance(error, KuweniError) else str(error) or "Unknown error"
    return f"Sorry, I encountered an error: {message}. Please try again."


class InteractionController:

    def __init__(
        self,
        store: SessionStore,
        gateway: Gateway,
        notifier: Optional[Notifier] = None,
    ):
        self.store = store
        self.gateway = gateway
        self.notifier = notifier or LogNotifier()

        self.chat_status = ActionStatus()
        self.image_status = ActionStatus()
        self.voice_status = ActionStatus()

        self.image_result: Optional[GenerationResult] = None
        self.image_data: Optional[ProxiedImage] = None
        self.image_error: Optional[str] = None
        self.voice_result: Optional[GenerationResult] = None

    def _notify(self, title: str, description: str, destructive: bool = False) -> None:
        self.notifier.notify(
            Notification(title=title, description=description, variant="destructive" if destructive else "default")
        )

    # =====================================================
    # Sessions
    # =====================================================

    def new_session(self):
        return self.store.create_session()

    def select_session(self, session_id: str):
        return self.store.select_session(session_id)

    def delete_session(self, session_id: str) -> bool:
        deleted = self.store.delete_session(session_id)
        if deleted:
            self._notify("Chat deleted", "The chat session has been removed.")
        return deleted

    def delete_message(self, message_id: str) -> bool:
        current = self.store.current
        if current is None:
            return False
        self.store.delete_message(current.id, message_id)
        self._notify("Message deleted", "The message has been removed from the conversation.")
        return True

    def copy_message(self, content: str) -> bool:
        if copy_to_clipboard(content):
            self._notify("Copied to clipboard", "Message content has been copied to your clipboard.")
            return True
        self._notify("Copy failed", "Failed to copy message to clipboard.", destructive=True)
        return False

    # =====================================================
    # Chat
    # =====================================================

    def send_message(self, text: str, model: Optional[str] = None) -> Optional[Message]:
        """
        发送消息：先写入用户消息，再请求回复

        Returns:
            追加的 assistant 消息（成功回复或错误说明）；被忽略时返回 None
        """
        current = self.store.current
        if not text or not text.strip() or current is None or self.chat_status.pending:
            return None

        session_id = current.id
        token = self.store.begin_request(session_id)
        self.store.append_message(session_id, user_message(text), token=token)
        self.chat_status = ActionStatus(ActionState.PENDING)

        try:
            reply = self.gateway.chat(text, model or Config.ui.default_text_model)
            answer = assistant_message(reply.response)
            self.chat_status = ActionStatus(ActionState.SUCCESS)
        except KuweniError as e:
            logger.error(f"❌ Chat failed: {e.message}")
            answer = assistant_message(chat_error_text(e))
            self.chat_status = ActionStatus(ActionState.FAILED, error=e.message)
        except Exception as e:
            logger.exception(f"❌ Chat failed unexpectedly: {e}")
            answer = assistant_message(chat_error_text(e))
            self.chat_status = ActionStatus(ActionState.FAILED, error=str(e) or "Unknown error")

        self.store.append_message(session_id, answer, token=token)
        return answer

    # =====================================================
    # Image
    # =====================================================

    def generate_image(self, prompt: str, model: Optional[str] = None) -> Optional[GenerationResult]:
        if not prompt or not prompt.strip() or self.image_status.pending:
            return None

        self.image_result = None
        self.image_data = None
        self.image_error = None
        self.image_status = ActionStatus(ActionState.PENDING)
        model = model or Config.ui.default_image_model

        try:
            result = self.gateway.generate_image(prompt, model)
        except Exception as e:
            self._image_failed(e)
            return None

        self.image_result = GenerationResult(
            url=result.proxy_url or result.image_url,
            source_prompt=prompt,
            model_or_voice=result.model,
            direct_url=result.image_url,
        )

        # 图片字节只拉取一次，之后的页面刷新都从 image_data 渲染
        try:
            self.image_data = self.gateway.fetch_image(self.image_result.url)
        except Exception as e:
            self.report_render_error(e)
            return None

        self.image_status = ActionStatus(ActionState.SUCCESS)
        return self.image_result

    def _image_failed(self, error: Exception) -> None:
        if isinstance(error, KuweniError):
            message = error.message
            logger.error(f"❌ Image generation failed: {message}")
        else:
            message = str(error) or "Unknown error"
            logger.exception(f"❌ Image generation failed unexpectedly: {message}")
        self.image_error = message
        self.image_status = ActionStatus(ActionState.FAILED, error=message)
        self._notify("Image generation failed", message, destructive=True)

    def report_render_error(self, error: Optional[Exception] = None) -> RenderError:
        """图片无法加载或解码：用渲染错误覆盖之前的结果"""
        logger.error(f"❌ Image render error: {error} (url: {self.image_result.url if self.image_result else None})")
        self.image_result = None
        self.image_data = None
        self.image_error = RENDER_ERROR_MESSAGE
        self.image_status = ActionStatus(ActionState.FAILED, error=RENDER_ERROR_MESSAGE)
        return RenderError(RENDER_ERROR_MESSAGE)

    def download_image(self) -> Optional[DownloadPayload]:
        """
        准备当前图片的下载内容

        代理链接通过网关重新拉取字节；直链直接下载。
        """
        if self.image_result is None:
            return None

        url = self.image_result.url
        try:
            if is_proxy_url(url):
                image = self.gateway.fetch_image(url)
                payload = DownloadPayload(
                    filename=build_download_filename(),
                    content=image.content,
                    mime_type=image.content_type,
                )
            else:
                payload = fetch_download(url)
        except Exception as e:
            logger.error(f"❌ Download error: {e}")
            self._notify("Download failed", "Failed to download the image.", destructive=True)
            return None

        self._notify("Download started", "Image download has been initiated.")
        return payload

    # =====================================================
    # Voice
    # =====================================================

    def generate_voice(self, prompt: str, voice: Optional[str] = None) -> Optional[GenerationResult]:
        if not prompt or not prompt.strip() or self.voice_status.pending:
            return None

        self.voice_status = ActionStatus(ActionState.PENDING)
        voice = voice or Config.ui.default_voice

        try:
            result = self.gateway.generate_voice(prompt, voice)
        except Exception as e:
            if isinstance(e, KuweniError):
                message = e.message
                logger.error(f"❌ Voice generation failed: {message}")
            else:
                message = str(e) or "Unknown error"
                logger.exception(f"❌ Voice generation failed unexpectedly: {message}")
            self.voice_status = ActionStatus(ActionState.FAILED, error=message)
            self._notify("Voice generation failed", f"Failed to generate voice: {message}", destructive=True)
            return None

        self.voice_result = GenerationResult(
            url=result.audio_url,
            source_prompt=prompt,
            model_or_voice=result.voice,
        )
        self.voice_status = ActionStatus(ActionState.SUCCESS)
        return self.voice_result
