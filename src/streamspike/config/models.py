"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, streamspike.toml only contains
overrides. With no file at all the pipeline reads ``Input.txt`` and fetches
``https://www.google.com/``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DecodeErrors = Literal["strict", "replace"]


class PipelineConfig(BaseModel):
    """[pipeline] section."""

    model_config = {"frozen": True}

    input: str = "Input.txt"
    output: str = "Output.txt"
    fetch_output: str = "Google.txt"
    url: str = "https://www.google.com/"
    decode_errors: DecodeErrors = "strict"


class HttpConfig(BaseModel):
    """[http] section."""

    model_config = {"frozen": True}

    # Matches httpx's own default client timeout.
    timeout: float = Field(default=5.0, gt=0)
    follow_redirects: bool = True
