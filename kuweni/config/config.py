from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Annotated
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class PollinationsConfig(BaseModel):
    """上游生成服务 (Pollinations.AI)"""
    text_base_url: Annotated[str, Field(default="https://text.pollinations.ai")]
    image_base_url: Annotated[str, Field(default="https://image.pollinations.ai")]
    image_width: Annotated[int, Field(default=512)]
    image_height: Annotated[int, Field(default=512)]
    nologo: Annotated[bool, Field(default=True)]
    audio_model: Annotated[str, Field(default="openai-audio")]
    text_timeout: Annotated[Optional[float], Field(default=None)]  # None = 不限时
    probe_timeout: Annotated[float, Field(default=5.0)]


class ProxyConfig(BaseModel):
    """图片代理配置"""
    route: Annotated[str, Field(default="/api/proxy-image")]
    timeout: Annotated[float, Field(default=10.0)]
    user_agent: Annotated[str, Field(default=BROWSER_USER_AGENT)]
    accept: Annotated[str, Field(default="image/webp,image/apng,image/*,*/*;q=0.8")]
    accept_language: Annotated[str, Field(default="en-US,en;q=0.9")]
    cache_max_age: Annotated[int, Field(default=3600)]


class GatewayConfig(BaseModel):
    """前端访问网关的方式"""
    base_url: Annotated[str, Field(default="http://127.0.0.1:8000")]
    mode: Annotated[Literal["http", "local"], Field(default="http")]


class UIConfig(BaseModel):
    title_max_chars: Annotated[int, Field(default=50)]
    default_text_model: Annotated[str, Field(default="gpt-3.5-turbo")]
    default_image_model: Annotated[str, Field(default="dall-e-3")]
    default_voice: Annotated[str, Field(default="alloy")]
    download_prefix: Annotated[str, Field(default="kuweni-ai")]


class Settings(BaseSettings):
    log_level: Annotated[str, Field(default="INFO")]
    cors_origins: Annotated[List[str], Field(default=["*"])]

    pollinations: PollinationsConfig = Field(default_factory=PollinationsConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def yaml_settings() -> Dict[str, Any]:
            path = Path("settings.yaml")
            if not path.exists():
                return {}
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )


Config = Settings()
