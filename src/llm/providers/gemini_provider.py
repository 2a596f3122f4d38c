from __future__ import annotations
import os
import httpx
from llm.errors import LLMNotConfiguredError, LLMProviderError
from .base import LLMProvider

class GeminiProvider(LLMProvider):
    name = "gemini"

    def __init__(self, temperature: float = 0.7, max_output_tokens: int = 2048):
        self.api_key = os.getenv("GEMINI_API_KEY", "").strip()
        self.model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash").strip()
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ).strip()
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

        if not self.api_key:
            raise LLMNotConfiguredError("GEMINI_API_KEY is missing")

    def generate(self, *, system: str, user: str, model: str | None = None) -> str:
        url = f"{self.base_url}/models/{model or self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        with httpx.Client(timeout=30.0) as client:
            r = client.post(url, params={"key": self.api_key}, json=payload)
            r.raise_for_status()
            data = r.json()

        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason") or "no candidates"
            raise LLMProviderError(f"Gemini returned no output: {reason}")
        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts)
