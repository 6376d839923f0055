#!/usr/bin/env python3
"""
Tests for the OpenAI and Azure client configurations.
"""

import unittest

from aio_openai.config import AzureConfig, Env, OpenAIConfig


class TestOpenAIConfig(unittest.TestCase):
    """Test cases for OpenAIConfig."""

    def test_minimal_headers(self):
        config = OpenAIConfig(api_key="sk-test")

        self.assertEqual(config.headers(), {"Authorization": "Bearer sk-test"})
        self.assertEqual(config.url("/models"), "https://api.openai.com/v1/models")
        self.assertEqual(config.query(), [])

    def test_optional_headers(self):
        config = (
            OpenAIConfig(api_key="sk-test")
            .with_org_id("org-1")
            .with_project_id("proj-1")
            .with_beta("assistants=v2")
            .with_header("X-Custom", "yes")
        )

        self.assertEqual(config.headers(), {
            "Authorization": "Bearer sk-test",
            "OpenAI-Organization": "org-1",
            "OpenAI-Project": "proj-1",
            "OpenAI-Beta": "assistants=v2",
            "X-Custom": "yes",
        })

    def test_with_methods_return_copies(self):
        config = OpenAIConfig(api_key="sk-a")

        updated = config.with_api_key("sk-b").with_api_base("https://proxy.example.com/v1/")

        self.assertEqual(config.api_key, "sk-a")
        self.assertEqual(updated.api_key, "sk-b")
        self.assertEqual(updated.url("/files"), "https://proxy.example.com/v1/files")

    def test_repr_masks_key(self):
        self.assertNotIn("sk-secret", repr(OpenAIConfig(api_key="sk-secret")))

    def test_trailing_slash_is_stripped_on_construction(self):
        """A base url ending in '/' must not produce a double slash."""
        config = OpenAIConfig(api_base="https://proxy.example.com/v1/", api_key="sk-test")

        self.assertEqual(config.api_base, "https://proxy.example.com/v1")
        self.assertEqual(config.url("/chat/completions"), "https://proxy.example.com/v1/chat/completions")

    def test_from_env(self):
        env = Env(OPENAI_API_KEY="sk-env", OPENAI_BASE_URL="https://proxy.example.com/v1", OPENAI_ORG_ID="org-1")

        config = OpenAIConfig.from_env(env)

        self.assertEqual(config.api_key, "sk-env")
        self.assertEqual(config.api_base, "https://proxy.example.com/v1")
        self.assertEqual(config.org_id, "org-1")
        self.assertEqual(config.project_id, "")


class TestAzureConfig(unittest.TestCase):
    """Test cases for AzureConfig."""

    def setUp(self):
        self.config = AzureConfig(
            api_base="https://my-resource.openai.azure.com",
            api_key="azure-key",
            deployment_id="gpt4o",
            api_version="2024-10-21",
        )

    def test_headers(self):
        self.assertEqual(self.config.headers(), {"api-key": "azure-key"})

    def test_url_includes_deployment(self):
        self.assertEqual(
            self.config.url("/chat/completions"),
            "https://my-resource.openai.azure.com/openai/deployments/gpt4o/chat/completions",
        )

    def test_query_carries_api_version(self):
        self.assertEqual(self.config.query(), [("api-version", "2024-10-21")])

    def test_with_methods(self):
        updated = self.config.with_deployment_id("embeddings").with_api_version("2025-01-01")

        self.assertEqual(updated.url("/embeddings"),
                         "https://my-resource.openai.azure.com/openai/deployments/embeddings/embeddings")
        self.assertEqual(updated.query(), [("api-version", "2025-01-01")])
        self.assertEqual(self.config.deployment_id, "gpt4o")

    def test_repr_masks_key(self):
        self.assertNotIn("azure-key", repr(self.config))

    def test_trailing_slash_is_stripped_on_construction(self):
        config = AzureConfig(api_base="https://my-resource.openai.azure.com/", deployment_id="gpt4o")

        self.assertEqual(config.url("/models"), "https://my-resource.openai.azure.com/openai/deployments/gpt4o/models")

    def test_empty_api_version_is_omitted(self):
        """No api-version parameter is sent when the version is not set."""
        config = AzureConfig(api_base="https://my-resource.openai.azure.com", deployment_id="gpt4o")

        self.assertEqual(config.query(), [])


if __name__ == "__main__":
    unittest.main()
