"""
前端可选的模型 / 语音列表

仅用于展示：所有文本模型实际都由同一个服务商提供。
"""

from typing import List

from pydantic import BaseModel


class ModelOption(BaseModel):
    id: str
    name: str


TEXT_MODELS: List[ModelOption] = [
    ModelOption(id="gpt-3.5-turbo", name="GPT-3.5 Turbo"),
    ModelOption(id="gpt-4", name="GPT-4"),
    ModelOption(id="claude-3-sonnet", name="Claude 3 Sonnet"),
    ModelOption(id="claude-3-opus", name="Claude 3 Opus"),
    ModelOption(id="llama-2", name="Llama 2"),
    ModelOption(id="mistral", name="Mistral"),
]

IMAGE_MODELS: List[ModelOption] = [
    ModelOption(id="dall-e-3", name="DALL-E 3"),
    ModelOption(id="stable-diffusion", name="Stable Diffusion"),
    ModelOption(id="midjourney", name="Midjourney"),
]

VOICES: List[ModelOption] = [
    ModelOption(id="alloy", name="Alloy"),
    ModelOption(id="echo", name="Echo"),
    ModelOption(id="fable", name="Fable"),
    ModelOption(id="onyx", name="Onyx"),
    ModelOption(id="nova", name="Nova"),
    ModelOption(id="shimmer", name="Shimmer"),
]


def option_name(options: List[ModelOption], option_id: str) -> str:
    for option in options:
        if option.id == option_id:
            return option.name
    return option_id


def option_index(options: List[ModelOption], option_id: str) -> int:
    """下拉框的默认位置；不在列表里时退回第一项"""
    for i, option in enumerate(options):
        if option.id == option_id:
            return i
    return 0
