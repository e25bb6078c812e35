"""OpenAI Responses API client for the AI coach."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fuel_hub.domain.coach import CoachReply, ResearchSource
from fuel_hub.services.coach import CoachClient


@dataclass
class OpenAICoachClient(CoachClient):
    """Coach client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(cls, api_key: str, store: bool = False) -> "OpenAICoachClient":
        """Create an OpenAI coach client."""
        return cls(client=AsyncOpenAI(api_key=api_key), store=store)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        instructions: str,
        prompt: str,
        temperature: float | None,
        image_data_url: str | None = None,
        web_search: bool = False,
    ) -> CoachReply:
        """Call OpenAI Responses API and collect any URL citations."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [{"role": "user", "content": content}],
            "store": self.store,
        }
        if temperature is not None:
            request_payload["temperature"] = temperature
        if web_search:
            request_payload["tools"] = [{"type": "web_search"}]

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return CoachReply(text=output_text, sources=_extract_sources(response))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _extract_sources(response: object) -> list[ResearchSource]:
    """Collect unique ``url_citation`` annotations from response output."""
    sources: list[ResearchSource] = []
    seen: set[str] = set()
    for item in getattr(response, "output", None) or []:
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                url = getattr(annotation, "url", None)
                if not url or url in seen:
                    continue
                seen.add(url)
                title = getattr(annotation, "title", None) or "Source"
                sources.append(ResearchSource(title=title, uri=url))
    return sources
