"""
Client for an OpenAI-compatible chat completions endpoint.

The research assistant only ever talks to the language model through
``LLMClient.complete``; any failure surfaces as ``LLMUnavailable`` so callers
can fall back to locally composed answers.
"""
import os
import requests
import logging
from typing import Dict, List, Optional
from django.conf import settings

logger = logging.getLogger('rms.assistant')

DEFAULT_API_URL = 'https://api.groq.com/openai/v1/chat/completions'
DEFAULT_MODEL = 'mixtral-8x7b-32768'

SYSTEM_PROMPT = "You are a helpful AI assistant for research document analysis."


class LLMUnavailable(Exception):
    """The language model could not produce an answer"""


def _config(name, default):
    return getattr(settings, name, os.getenv(name, default))


class LLMClient:
    def __init__(self, api_url: Optional[str] = None, api_key: Optional[str] = None,
                 model: Optional[str] = None, timeout: Optional[int] = None):
        self.api_url = api_url or _config('RAG_LLM_API_URL', DEFAULT_API_URL)
        self.api_key = api_key if api_key is not None else _config('RAG_LLM_API_KEY', '')
        self.model = model or _config('RAG_LLM_MODEL', DEFAULT_MODEL)
        self.timeout = int(timeout or _config('RAG_LLM_TIMEOUT', 30))
        self.max_tokens = int(_config('RAG_LLM_MAX_TOKENS', 1000))
        self.temperature = float(_config('RAG_LLM_TEMPERATURE', 0.7))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send a chat transcript and return the assistant's reply text.

        Args:
            messages: [{'role': 'system'|'user'|'assistant', 'content': str}, ...]

        Raises:
            LLMUnavailable: not configured, network failure, HTTP error or malformed payload
        """
        if not self.is_configured:
            raise LLMUnavailable('Language model endpoint is not configured')

        payload = {
            'model': self.model,
            'messages': messages,
            'max_tokens': self.max_tokens,
            'temperature': self.temperature,
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }

        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            logger.warning(f"LLM request to {self.api_url} timed out after {self.timeout}s")
            raise LLMUnavailable('Language model request timed out')
        except requests.exceptions.RequestException as e:
            logger.error(f"LLM request failed: {str(e)}")
            raise LLMUnavailable(f'Language model request failed: {str(e)}')
        except ValueError as e:
            logger.error(f"LLM returned a non-JSON response: {str(e)}")
            raise LLMUnavailable('Language model returned an invalid response')

        try:
            content = data['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError):
            logger.error(f"Unexpected LLM response shape: {str(data)[:500]}")
            raise LLMUnavailable('Language model returned an unexpected response')

        if not content or not str(content).strip():
            raise LLMUnavailable('Language model returned an empty answer')
        return str(content).strip()

    def ask(self, prompt: str, system_prompt: str = SYSTEM_PROMPT) -> str:
        return self.complete([
            {'role': 'system', 'content': system_prompt},
            {'role': 'user', 'content': prompt},
        ])
