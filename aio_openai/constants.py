#!/usr/bin/env python3
"""
Library Constants

This module contains the endpoint defaults, header names and backoff
defaults used throughout the aio_openai client.
"""

# Default v1 API base url
OPENAI_API_BASE = "https://api.openai.com/v1"

# Header names
OPENAI_ORGANIZATION_HEADER = "OpenAI-Organization"
OPENAI_PROJECT_HEADER = "OpenAI-Project"
OPENAI_BETA_HEADER = "OpenAI-Beta"
AZURE_API_KEY_HEADER = "api-key"
LAST_EVENT_ID_HEADER = "Last-Event-ID"

# Default request timeout in seconds, delegated to the HTTP transport
DEFAULT_TIMEOUT = 600.0

# Streaming backoff defaults (seconds)
DEFAULT_INITIAL_INTERVAL = 0.5
DEFAULT_MULTIPLIER = 1.5
DEFAULT_MAX_ELAPSED_TIME = 900.0  # 15 minutes

# Marker sent by the API as the final data frame of a stream
STREAM_DONE_MARKER = "[DONE]"

# Error codes the API uses on 429 responses when billing quota is exhausted
QUOTA_ERROR_CODES = frozenset(
    {"insufficient_quota", "billing_hard_limit_reached", "quota_exceeded"}
)
