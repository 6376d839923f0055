#!/usr/bin/env python3
"""
Completion Models

This module contains the request and response structures of the legacy
text completions endpoint.
"""

from typing import Dict, List, Optional, Union

from pydantic import Field

from .chat import ChatCompletionStreamOptions, CompletionUsage
from .common import RequestModel, ResponseModel


class CreateCompletionRequest(RequestModel):
    """
    Request body for ``POST /completions``.

    Attributes:
        model: ID of the model to use
        prompt: String, list of strings, token list or list of token lists
        stream: Set by the resource method, must not be set to True for ``create``
    """

    model: str
    prompt: Union[str, List[str], List[int], List[List[int]]] = "<|endoftext|>"
    best_of: Optional[int] = None
    echo: Optional[bool] = None
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[int] = None
    max_tokens: Optional[int] = None
    n: Optional[int] = None
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    seed: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: Optional[bool] = None
    stream_options: Optional[ChatCompletionStreamOptions] = None
    suffix: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = None
    user: Optional[str] = None


class CompletionLogprobs(ResponseModel):
    text_offset: Optional[List[int]] = None
    token_logprobs: Optional[List[Optional[float]]] = None
    tokens: Optional[List[str]] = None
    top_logprobs: Optional[List[Optional[Dict[str, float]]]] = None


class CompletionChoice(ResponseModel):
    text: str
    index: int
    logprobs: Optional[CompletionLogprobs] = None
    finish_reason: Optional[str] = None


class CreateCompletionResponse(ResponseModel):
    """
    Completion returned by ``POST /completions``.

    Streamed completions use the same shape for every chunk.
    """

    id: str
    object: str = "text_completion"
    created: int
    model: str
    choices: List[CompletionChoice]
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None
