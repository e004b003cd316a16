import base64
import io
import json as jsonlib
from typing import Any, List, Optional

from PIL import Image, ImageDraw

from src.providers.base import ImageProvider


def png_bytes(size=(1080, 1080), color=(255, 255, 255), mode="RGB", fmt="PNG") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


def data_url(raw: bytes, media_type: str = "image/png") -> str:
    return f"data:{media_type};base64,{base64.b64encode(raw).decode()}"


def decode_data_url(url: str) -> Image.Image:
    _, payload = url.split(",", 1)
    img = Image.open(io.BytesIO(base64.b64decode(payload)))
    img.load()
    return img


def draw_logo(color) -> Image.Image:
    # 400x160: a disc on the left and a bar on the right, transparent elsewhere
    img = Image.new("RGBA", (400, 160), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse((20, 20, 140, 140), fill=color)
    draw.rectangle((160, 55, 380, 105), fill=color)
    return img


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, content_type: str = "application/json"):
        self.status_code = status_code
        self._body = body
        self.headers = {"Content-Type": content_type}

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        if isinstance(self._body, (dict, list)):
            return jsonlib.dumps(self._body)
        return "" if self._body is None else str(self._body)

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        return jsonlib.loads(self.text)


class FakeSession:
    """Returns (or raises) queued outcomes in order; the last one repeats."""

    def __init__(self, outcomes: Optional[List[Any]] = None):
        self.outcomes = list(outcomes or [])
        self.calls: List[dict] = []

    def request(self, method, url, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class StubProvider(ImageProvider):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.prompts = []
        self.request_ids = []

    def generate(self, prompt, *, aspect_ratio=None, request_id=None):
        self.prompts.append((prompt, aspect_ratio))
        self.request_ids.append(request_id)
        if self.error is not None:
            raise self.error
        return self.result

    def is_available(self):
        return self.error is None

    def is_reachable(self, request_id=None):
        self.request_ids.append(request_id)
        return self.result is not None
