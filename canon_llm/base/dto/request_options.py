"""
Pydantic DTO validating per-request generation options.

Purpose
-------
Options arrive as free keyword arguments at the public entry points. They are
validated here before any codec or transport is touched, so that a bad value
surfaces as :class:`InvalidParameter` with no network interaction.

External dependencies: Pydantic only.

Failure modes
-------------
``RequestOptions.parse`` converts ``pydantic.ValidationError`` into
``InvalidParameter`` naming the first offending field. Unknown keys are
rejected the same way.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import InvalidParameter


class RequestOptions(BaseModel):
    """Generation and transport options for one request.

    Parameters:
        temperature: Sampling temperature within [0.0, 2.0].
        max_tokens: Positive output token cap.
        top_p: Nucleus sampling within [0.0, 1.0].
        frequency_penalty / presence_penalty: Within [-2.0, 2.0].
        stop: One stop sequence or a list of them.
        stream: Request a streaming response.
        api_key: Explicit credential; wins over the environment.
        base_url: Override of the vendor endpoint root.
        dimensions / encoding_format / user: Embedding options.
        provider_options: Vendor-specific body fields merged last.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False
    api_key: Optional[str] = Field(default=None, repr=False)
    base_url: Optional[str] = None
    dimensions: Optional[int] = Field(default=None, gt=0)
    encoding_format: Optional[str] = None
    user: Optional[str] = None
    provider_options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("stop")
    @classmethod
    def _non_empty_stop(cls, value: Optional[Union[str, List[str]]]) -> Optional[Union[str, List[str]]]:
        if isinstance(value, list) and not value:
            raise ValueError("stop must not be an empty list")
        return value

    @classmethod
    def parse(cls, options: Optional[Mapping[str, Any]] = None) -> "RequestOptions":
        """Validate ``options`` and return a frozen instance.

        Raises:
            InvalidParameter: On any out-of-range or unknown option.
        """
        if isinstance(options, RequestOptions):
            return options
        try:
            return cls(**dict(options or {}))
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first.get("loc", ())) or "options"
            raise InvalidParameter(parameter=f"{loc}: {first.get('msg', 'invalid value')}") from exc


__all__ = ["RequestOptions"]
