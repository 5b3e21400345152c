import random
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """毫秒时间戳 (base36) + 随机后缀，允许极小概率碰撞"""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ALPHABET, k=11))
    return _to_base36(millis) + suffix
