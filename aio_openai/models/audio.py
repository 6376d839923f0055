#!/usr/bin/env python3
"""
Audio Models

This module contains the speech, transcription and translation requests and
their responses.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from ..api.forms import MultipartForm
from ..errors import FileSaveError
from .common import InputSource, RequestModel, ResponseModel

logger = logging.getLogger(__name__)


class Voice(str, Enum):
    ALLOY = "alloy"
    ASH = "ash"
    BALLAD = "ballad"
    CORAL = "coral"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SAGE = "sage"
    SHIMMER = "shimmer"
    VERSE = "verse"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


class AudioResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"


class CreateSpeechRequest(RequestModel):
    """
    Request body for ``POST /audio/speech``.

    Attributes:
        input: Text to generate audio for, at most 4096 characters
        model: TTS model, e.g. "tts-1", "tts-1-hd" or "gpt-4o-mini-tts"
        voice: Voice to use
        speed: Speed of the generated audio, 0.25 to 4.0
    """

    input: str = Field(..., max_length=4096)
    model: str
    voice: Voice
    instructions: Optional[str] = None
    response_format: Optional[SpeechResponseFormat] = None
    speed: Optional[float] = Field(None, ge=0.25, le=4.0)


class CreateSpeechResponse:
    """Raw audio returned by the speech endpoint."""

    def __init__(self, content: bytes):
        self.bytes = content

    def save(self, file_path: Union[str, Path]) -> Path:
        """
        Write the audio to ``file_path``, creating parent directories.

        Raises:
            FileSaveError: If the file cannot be written
        """
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(self.bytes)
        except OSError as e:
            raise FileSaveError(f"{path}: {e}") from e
        logger.debug(f"Saved {len(self.bytes)} bytes of audio to {path}")
        return path


class CreateTranscriptionRequest(RequestModel):
    """
    Request for ``POST /audio/transcriptions`` (multipart).

    Attributes:
        file: Audio file (flac, mp3, mp4, mpeg, mpga, m4a, ogg, wav or webm)
        model: Transcription model, e.g. "whisper-1"
        language: ISO-639-1 input language
        timestamp_granularities: "word" and/or "segment" (verbose_json only)
        include: Additional information, e.g. ["logprobs"] (gpt-4o transcribe models)
        stream: Set by ``transcribe_stream``, must not be set to True for ``transcribe``
    """

    file: InputSource
    model: str
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None
    language: Optional[str] = None
    timestamp_granularities: Optional[List[str]] = None
    include: Optional[List[str]] = None
    stream: Optional[bool] = None

    def to_form(self) -> MultipartForm:
        form = MultipartForm().file("file", self.file).text("model", self.model)
        for name in ("prompt", "response_format", "temperature", "language", "stream"):
            form.text(name, getattr(self, name))
        form.text("timestamp_granularities[]", self.timestamp_granularities)
        form.text("include[]", self.include)
        return form


class TranscriptionWord(ResponseModel):
    word: str
    start: float
    end: float


class TranscriptionSegment(ResponseModel):
    id: int
    start: float
    end: float
    text: str


class CreateTranscriptionResponse(ResponseModel):
    """
    Transcription in ``json`` or ``verbose_json`` format.

    ``language``, ``duration``, ``words`` and ``segments`` are present in
    ``verbose_json`` responses only.
    """

    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    words: Optional[List[TranscriptionWord]] = None
    segments: Optional[List[TranscriptionSegment]] = None


class CreateTranslationRequest(RequestModel):
    """Request for ``POST /audio/translations`` (multipart); output is always English."""

    file: InputSource
    model: str
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None

    def to_form(self) -> MultipartForm:
        form = MultipartForm().file("file", self.file).text("model", self.model)
        for name in ("prompt", "response_format", "temperature"):
            form.text(name, getattr(self, name))
        return form


class CreateTranslationResponse(ResponseModel):
    text: str


# Transcription stream events


class TranscriptionLogProb(ResponseModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class TranscriptionTextDeltaEvent(ResponseModel):
    """Text appended to the transcript; ``segment_id`` is set by diarizing models."""

    type: Literal["transcript.text.delta"] = "transcript.text.delta"
    delta: str
    logprobs: Optional[List[TranscriptionLogProb]] = None
    segment_id: Optional[str] = None


class TranscriptionTextSegmentEvent(ResponseModel):
    type: Literal["transcript.text.segment"] = "transcript.text.segment"
    id: str
    start: float
    end: float
    text: str
    speaker: Optional[str] = None


class TranscriptionTextDoneEvent(ResponseModel):
    """Final event of a transcription stream, carrying the complete text."""

    type: Literal["transcript.text.done"] = "transcript.text.done"
    text: str
    logprobs: Optional[List[TranscriptionLogProb]] = None
    usage: Optional[Dict[str, Any]] = None


TranscriptionStreamEvent = Annotated[
    Union[TranscriptionTextDeltaEvent, TranscriptionTextSegmentEvent, TranscriptionTextDoneEvent],
    Field(discriminator="type"),
]
