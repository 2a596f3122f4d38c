from __future__ import annotations
import os
import httpx
from llm.errors import LLMNotConfiguredError
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()

        if not self.api_key:
            raise LLMNotConfiguredError("OPENAI_API_KEY is missing")

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        messages = [{"role": "user", "content": user}]
        if system:
            messages.insert(0, {"role": "system", "content": system})
        payload = {
            "model": model or self.model,
            "messages": messages,
            "temperature": 0.7,
        }

        with httpx.Client(timeout=30.0) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["choices"][0]["message"]["content"] or ""
