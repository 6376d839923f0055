"""
Turn audio into text or text into audio.
"""

from typing import Any, Mapping, Union

from ..api.byot import FormConvertible, byot
from ..errors import InvalidArgumentError
from ..models.audio import (
    AudioResponseFormat,
    CreateSpeechRequest,
    CreateSpeechResponse,
    CreateTranscriptionRequest,
    CreateTranscriptionResponse,
    CreateTranslationRequest,
    CreateTranslationResponse,
    TranscriptionStreamEvent,
)
from ..streaming.stream import Stream
from .base import Resource, stream_flag, with_stream_enabled

# Formats answered with plain text instead of a JSON document
TEXT_RESPONSE_FORMATS = frozenset({AudioResponseFormat.TEXT, AudioResponseFormat.SRT, AudioResponseFormat.VTT})


class Audio(Resource):
    """Operations on ``/audio``."""

    async def speech(self, request: Union[CreateSpeechRequest, Mapping[str, Any]]) -> CreateSpeechResponse:
        """
        Generates audio from the input text.

        Returns:
            The raw audio, see ``CreateSpeechResponse.save``
        """
        if isinstance(request, Mapping):
            try:
                request = CreateSpeechRequest.model_validate(request)
            except ValueError as e:
                raise InvalidArgumentError(f"request: {e}") from e

        body, _ = await self._client.post_raw("/audio/speech", request, self._options)
        return CreateSpeechResponse(body)

    @byot(T0=FormConvertible)
    async def transcribe(self, request: CreateTranscriptionRequest, *,
                         response_model: Any = None) -> CreateTranscriptionResponse:
        """
        Transcribes audio into the input language (``json`` or ``verbose_json`` format).

        Raises:
            InvalidArgumentError: If the request asks for streaming or a text format
        """
        _check_json_format(request, "transcribe_raw")
        if stream_flag(request) is True:
            raise InvalidArgumentError("When stream is true, use transcribe_stream()")

        return await self._client.post_form("/audio/transcriptions", request, self._options,
                                            response_model=response_model)

    @byot(T0=FormConvertible)
    async def transcribe_stream(self, request: CreateTranscriptionRequest, *,
                                response_model: Any = None) -> Stream[TranscriptionStreamEvent]:
        """
        Transcribes audio and streams the transcript as it is produced.

        The stream ends after the server closes it, following the
        ``transcript.text.done`` event. Not supported by ``whisper-1``.

        Raises:
            InvalidArgumentError: If the request sets stream to false
        """
        if stream_flag(request) is False:
            raise InvalidArgumentError("When stream is false, use transcribe()")

        return await self._client.post_form_stream("/audio/transcriptions", with_stream_enabled(request),
                                                   self._options, response_model=response_model,
                                                   ends_on_close=True)

    async def transcribe_raw(self, request: Union[CreateTranscriptionRequest, Mapping[str, Any]]) -> bytes:
        """Transcribes audio and returns the body as sent, for ``text``, ``srt`` and ``vtt`` formats."""
        body, _ = await self._client.post_form_raw("/audio/transcriptions", request, self._options)
        return body

    @byot(T0=FormConvertible)
    async def translate(self, request: CreateTranslationRequest, *,
                        response_model: Any = None) -> CreateTranslationResponse:
        """
        Translates audio into English.

        Raises:
            InvalidArgumentError: If the request asks for a text format
        """
        _check_json_format(request, "translate_raw")
        return await self._client.post_form("/audio/translations", request, self._options,
                                            response_model=response_model)

    async def translate_raw(self, request: Union[CreateTranslationRequest, Mapping[str, Any]]) -> bytes:
        """Translates audio into English and returns the body as sent."""
        body, _ = await self._client.post_form_raw("/audio/translations", request, self._options)
        return body


def _check_json_format(request: Any, raw_method: str) -> None:
    if isinstance(request, Mapping):
        value = request.get("response_format")
    else:
        value = getattr(request, "response_format", None)

    try:
        response_format = AudioResponseFormat(value) if value is not None else None
    except ValueError:
        return
    if response_format in TEXT_RESPONSE_FORMATS:
        raise InvalidArgumentError(f"response_format {response_format.value!r} is not JSON, use {raw_method}()")
