from __future__ import annotations
import os
import httpx
from .base import LLMProvider

class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(self):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").strip()

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/api/chat"
        messages = [{"role": "user", "content": user}]
        if system:
            messages.insert(0, {"role": "system", "content": system})
        payload = {
            "model": model or self.model,
            "stream": False,
            "messages": messages,
            "options": {"temperature": 0.7},
        }

        with httpx.Client(timeout=60.0) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()

        return data["message"]["content"]
