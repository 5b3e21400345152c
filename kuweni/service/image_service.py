# kuweni/service/image_service.py

"""
Image Service - 图片生成适配器

流程：
1. 规范化 prompt（换行变空格，去首尾空白）
2. 构造候选 URL：主 URL（512x512, nologo）和默认参数的备用 URL
3. 依次 HEAD 探测，第一个成功的胜出；全部失败时仍使用主 URL
4. 返回直链和同源代理链接
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

import requests

from kuweni.config import Config
from kuweni.errors import ValidationError
from kuweni.model.generation import ImageResult
from kuweni.utils.urls import encode_component

logger = logging.getLogger(__name__)


def normalize_prompt(prompt: str) -> str:
    return prompt.replace("\r\n", " ").replace("\n", " ").replace("\r", " ").strip()


def build_image_candidates(prompt: str) -> List[str]:
    """按优先级排列的候选 URL"""
    cfg = Config.pollinations
    base = f"{cfg.image_base_url}/prompt/{encode_component(prompt)}"
    params = {"width": cfg.image_width, "height": cfg.image_height}
    if cfg.nologo:
        params["nologo"] = "true"
    return [f"{base}?{urlencode(params)}", base]


def build_proxy_url(url: str) -> str:
    return f"{Config.proxy.route}?{urlencode({'url': url})}"


def probe(url: str, timeout: Optional[float] = None) -> bool:
    """HEAD 探测，不传输 body；任何异常都视为探测失败"""
    try:
        r = requests.head(
            url,
            headers={"User-Agent": Config.proxy.user_agent},
            timeout=timeout or Config.pollinations.probe_timeout,
            allow_redirects=True,
        )
    except requests.RequestException as e:
        logger.warning(f"⚠️ Image API: probe failed for {url}: {e}")
        return False
    return r.ok


def select_candidate(candidates: List[str]) -> str:
    for i, url in enumerate(candidates):
        if probe(url):
            logger.info(f"✅ Image API: candidate #{i + 1} accessible")
            return url
        logger.info(f"🔁 Image API: candidate #{i + 1} failed, trying next...")

    logger.info("⚠️ Image API: all candidates failed, using primary URL anyway")
    return candidates[0]


def generate_image(prompt: Optional[str], model: Optional[str] = None) -> ImageResult:
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required")

    logger.info(f"🎨 Image API: generating image for prompt: {prompt[:100]}")

    clean_prompt = normalize_prompt(prompt)
    candidates = build_image_candidates(clean_prompt)
    for url in candidates:
        logger.debug(f"🔗 Image API: candidate URL: {url}")

    image_url = select_candidate(candidates)

    return ImageResult(
        image_url=image_url,
        proxy_url=build_proxy_url(image_url),
        model=model or "default",
        prompt=clean_prompt,
    )
