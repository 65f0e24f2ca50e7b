"""Text-completion providers used for project summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from publicgoods.settings import settings

PROMPT_TEMPLATE = "Summarize this Web3 public goods project:\n\n{description}"


class ProviderError(Exception):
	"""The completion provider failed or answered with an unusable payload."""


class SummaryProvider(Protocol):
	async def summarize(self, description: str) -> str:
		...


@dataclass
class OpenAICompletionsProvider:
	"""Calls an OpenAI-compatible ``/completions`` endpoint."""

	http: httpx.AsyncClient
	api_key: Optional[str]
	base_url: str = "https://api.openai.com/v1"
	model: str = "gpt-4"
	max_tokens: int = 200
	temperature: float = 0.7
	timeout: float = 20.0

	def build_request(self, description: str) -> dict[str, object]:
		return {
			"model": self.model,
			"prompt": PROMPT_TEMPLATE.format(description=description),
			"max_tokens": self.max_tokens,
			"temperature": self.temperature,
		}

	async def summarize(self, description: str) -> str:
		if not self.api_key:
			raise ProviderError("api_key_missing")
		response = await self.http.post(
			f"{self.base_url.rstrip('/')}/completions",
			json=self.build_request(description),
			headers={"Authorization": f"Bearer {self.api_key}"},
			timeout=self.timeout,
		)
		response.raise_for_status()
		try:
			text = response.json()["choices"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError) as exc:
			raise ProviderError("malformed_response") from exc
		return str(text).strip()


_http: Optional[httpx.AsyncClient] = None
_provider: Optional[SummaryProvider] = None


def get_provider() -> SummaryProvider:
	global _http, _provider
	if _provider is None:
		_http = httpx.AsyncClient()
		_provider = OpenAICompletionsProvider(
			http=_http,
			api_key=settings.openai_api_key,
			base_url=settings.openai_base_url,
			model=settings.summary_model,
			max_tokens=settings.summary_max_tokens,
			temperature=settings.summary_temperature,
			timeout=settings.summary_timeout_seconds,
		)
	return _provider


def set_provider(provider: Optional[SummaryProvider]) -> None:
	global _provider
	_provider = provider


async def close_provider() -> None:
	global _http, _provider
	if _http is not None:
		await _http.aclose()
		_http = None
	_provider = None
