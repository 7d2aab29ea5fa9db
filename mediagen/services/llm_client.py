# mediagen/services/llm_client.py
import logging
from typing import Optional
from openai import OpenAI
from httpx import Timeout, Limits
import httpx

from ..models.options_models import GenerationOptions

log = logging.getLogger("mediagen")


def build_http_client(timeout_seconds: float) -> httpx.Client:
    # the read/write timeout bounds the whole model call; expiry aborts the request
    return httpx.Client(
        http2=False,
        headers={"Accept-Encoding": "identity", "Connection": "keep-alive"},
        timeout=Timeout(connect=30.0, read=timeout_seconds, write=timeout_seconds, pool=120.0),
        limits=Limits(max_connections=10, max_keepalive_connections=2),
        trust_env=False,
    )


class ChatTextClient:
    """
    Single "ask the model for text" operation over an OpenAI-compatible
    chat-completions endpoint.

    Failures from the SDK (network, auth, quota) propagate unchanged and are
    not retried here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 600.0,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._client = client

    def _sdk(self) -> OpenAI:
        # built on first call: a missing API key surfaces as an upstream failure of that call
        if self._client is None:
            self._client = OpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                http_client=build_http_client(self._timeout_seconds),
                max_retries=0,
            )
        return self._client

    def generate_text(self, user_prompt: str, system_prompt: str, options: GenerationOptions) -> str:
        log.info(f"[llm] model={self.model} temperature={options.temperature} max_tokens={options.max_output_size}")
        resp = self._sdk().chat.completions.create(
            model=self.model,
            temperature=options.temperature,
            max_tokens=options.max_output_size,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **options.extra_fields,
        )
        content = resp.choices[0].message.content
        return content if isinstance(content, str) else str(content or "")
