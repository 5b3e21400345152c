"""
错误类型 - 适配器、HTTP 层和控制器共用

适配器抛出这些异常；main.py 把它们转换成 {"error": message} 响应并使用对应的
status_code；HttpGateway 再根据响应把它们还原成同一个异常类。
"""

from typing import Optional


class KuweniError(Exception):
    """基类；``status_code`` 是网关返回的 HTTP 状态码"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(KuweniError):
    """必填输入缺失或为空，在任何网络请求之前抛出"""

    status_code = 400


class UpstreamError(KuweniError):
    """服务商返回非成功状态、请求失败，或响应体为空 / 格式不对"""

    status_code = 500

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        upstream_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body


class UpstreamTimeoutError(UpstreamError):
    """代理请求超时"""

    status_code = 504


class RenderError(KuweniError):
    """图片无法在前端加载或显示"""

    status_code = 500


def error_for_status(status_code: int, message: str) -> KuweniError:
    """根据网关的 ``{"error": ...}`` 响应还原对应的异常"""
    if status_code == 400:
        return ValidationError(message)
    if status_code == 504:
        return UpstreamTimeoutError(message, upstream_status=status_code)
    return UpstreamError(message, upstream_status=status_code)
