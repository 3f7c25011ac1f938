"""
Concurrent, best-effort image generation.

``generate_images`` maps an image generator over a list of prompts.  Every
prompt yields an ``ImageOutcome`` in the same position: skipped (blank
prompt), succeeded (a data URI), or failed (the error text).  A failure never
affects sibling calls or the batch as a whole.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from openai import AsyncOpenAI

from app.core.config import settings
from app.core.errors import ImageFailure

logger = logging.getLogger(__name__)

ImageGenerator = Callable[[str], Awaitable[str | None]]


@dataclass(frozen=True)
class ImageOutcome:
    prompt: str
    data_uri: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.data_uri is not None

    @property
    def skipped(self) -> bool:
        return not self.prompt.strip()


@dataclass(frozen=True)
class ImageBatch:
    outcomes: list[ImageOutcome]

    @property
    def images(self) -> list[str | None]:
        """Optional data URIs, aligned with the input prompts."""
        return [outcome.data_uri for outcome in self.outcomes]

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> list[ImageOutcome]:
        return [outcome for outcome in self.outcomes if outcome.error is not None]


async def generate_images(
    prompts: Sequence[str],
    generator: ImageGenerator,
    timeout: float | None = None,
) -> ImageBatch:
    """Run *generator* once per non-empty prompt, all concurrently.

    Parameters
    ----------
    prompts:
        One entry per slot; blank strings produce a skipped outcome without a call.
    generator:
        Coroutine function turning a prompt into a data URI.  ``None`` counts
        as a failure.
    timeout:
        Optional per-call time box in seconds.  A call that exceeds it is
        cancelled and counts as a failure.
    """

    async def _call(prompt: str) -> str | None:
        if not prompt.strip():
            return None
        if timeout:
            data_uri = await asyncio.wait_for(generator(prompt), timeout)
        else:
            data_uri = await generator(prompt)
        if not data_uri:
            raise ImageFailure("No image returned from the provider")
        return data_uri

    settled = await asyncio.gather(
        *(_call(prompt) for prompt in prompts),
        return_exceptions=True,
    )

    outcomes: list[ImageOutcome] = []
    for prompt, value in zip(prompts, settled):
        if isinstance(value, BaseException):
            if isinstance(value, asyncio.TimeoutError):
                error = f"timed out after {timeout}s"
            else:
                error = str(value) or type(value).__name__
            logger.warning("Image generation failed for prompt %r: %s", prompt, error)
            outcomes.append(ImageOutcome(prompt=prompt, error=error))
        else:
            outcomes.append(ImageOutcome(prompt=prompt, data_uri=value))

    batch = ImageBatch(outcomes)
    logger.info(
        "Image batch settled: %d requested, %d generated, %d failed",
        sum(1 for p in prompts if p.strip()),
        batch.succeeded,
        len(batch.failed),
    )
    return batch


# ---------------------------------------------------------------------------
# OpenAI image generator
# ---------------------------------------------------------------------------

_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY or None)
    return _client


async def generate_openai_image(prompt: str) -> str | None:
    """Generate one image and return it as a base64 PNG data URI."""
    response = await _get_client().images.generate(
        model=settings.IMAGE_MODEL,
        prompt=prompt,
        size=settings.IMAGE_SIZE,
        n=1,
    )
    if not response.data or not response.data[0].b64_json:
        raise ImageFailure("No image returned from the provider")
    return f"data:image/png;base64,{response.data[0].b64_json}"
