#!/usr/bin/env python3
"""
Data Models Module

This module contains the request and response types of every resource
group supported by the aio_openai client.
"""

from .common import InputSource, RequestModel, ResponseModel
from .model import DeleteModelResponse, ListModelResponse, Model
from .chat import (
    ChatCompletionChunk,
    ChatCompletionNamedToolChoice,
    ChatCompletionRequestAssistantMessage,
    ChatCompletionRequestDeveloperMessage,
    ChatCompletionRequestMessage,
    ChatCompletionRequestMessageContentPartImage,
    ChatCompletionRequestMessageContentPartText,
    ChatCompletionRequestSystemMessage,
    ChatCompletionRequestToolMessage,
    ChatCompletionRequestUserMessage,
    ChatCompletionStreamOptions,
    ChatCompletionTool,
    CompletionUsage,
    CreateChatCompletionRequest,
    CreateChatCompletionResponse,
    FunctionObject,
    ImageUrl,
    ResponseFormat,
    Role,
)
from .completions import CreateCompletionRequest, CreateCompletionResponse
from .embeddings import (
    Base64Embedding,
    CreateBase64EmbeddingResponse,
    CreateEmbeddingRequest,
    CreateEmbeddingResponse,
    Embedding,
    EncodingFormat,
)
from .moderations import CreateModerationRequest, CreateModerationResponse
from .files import (
    CreateFileRequest,
    DeleteFileResponse,
    FileExpirationAfter,
    FilePurpose,
    ListFilesResponse,
    OpenAIFile,
)
from .images import (
    CreateImageEditRequest,
    CreateImageRequest,
    CreateImageVariationRequest,
    Image,
    ImageEditCompletedEvent,
    ImageEditPartialImageEvent,
    ImageEditStreamEvent,
    ImageGenCompletedEvent,
    ImageGenPartialImageEvent,
    ImageGenStreamEvent,
    ImageResponseFormat,
    ImageSize,
    ImagesResponse,
)
from .audio import (
    AudioResponseFormat,
    CreateSpeechRequest,
    CreateSpeechResponse,
    CreateTranscriptionRequest,
    CreateTranscriptionResponse,
    CreateTranslationRequest,
    CreateTranslationResponse,
    SpeechResponseFormat,
    TranscriptionStreamEvent,
    TranscriptionTextDeltaEvent,
    TranscriptionTextDoneEvent,
    TranscriptionTextSegmentEvent,
    Voice,
)

__all__ = [
    "InputSource",
    "RequestModel",
    "ResponseModel",
    "Model",
    "ListModelResponse",
    "DeleteModelResponse",
    "ChatCompletionChunk",
    "ChatCompletionNamedToolChoice",
    "ChatCompletionRequestAssistantMessage",
    "ChatCompletionRequestDeveloperMessage",
    "ChatCompletionRequestMessage",
    "ChatCompletionRequestMessageContentPartImage",
    "ChatCompletionRequestMessageContentPartText",
    "ChatCompletionRequestSystemMessage",
    "ChatCompletionRequestToolMessage",
    "ChatCompletionRequestUserMessage",
    "ChatCompletionStreamOptions",
    "ChatCompletionTool",
    "CompletionUsage",
    "CreateChatCompletionRequest",
    "CreateChatCompletionResponse",
    "FunctionObject",
    "ImageUrl",
    "ResponseFormat",
    "Role",
    "CreateCompletionRequest",
    "CreateCompletionResponse",
    "Base64Embedding",
    "CreateBase64EmbeddingResponse",
    "CreateEmbeddingRequest",
    "CreateEmbeddingResponse",
    "Embedding",
    "EncodingFormat",
    "CreateModerationRequest",
    "CreateModerationResponse",
    "CreateFileRequest",
    "DeleteFileResponse",
    "FileExpirationAfter",
    "FilePurpose",
    "ListFilesResponse",
    "OpenAIFile",
    "CreateImageEditRequest",
    "CreateImageRequest",
    "CreateImageVariationRequest",
    "Image",
    "ImageEditCompletedEvent",
    "ImageEditPartialImageEvent",
    "ImageEditStreamEvent",
    "ImageGenCompletedEvent",
    "ImageGenPartialImageEvent",
    "ImageGenStreamEvent",
    "ImageResponseFormat",
    "ImageSize",
    "ImagesResponse",
    "AudioResponseFormat",
    "CreateSpeechRequest",
    "CreateSpeechResponse",
    "CreateTranscriptionRequest",
    "CreateTranscriptionResponse",
    "CreateTranslationRequest",
    "CreateTranslationResponse",
    "SpeechResponseFormat",
    "TranscriptionStreamEvent",
    "TranscriptionTextDeltaEvent",
    "TranscriptionTextDoneEvent",
    "TranscriptionTextSegmentEvent",
    "Voice",
]
