import sys
import unittest
from pathlib import Path

import httpx
import openai

PROJECT_ROOT = Path(__file__).resolve().parents[1]
TESTS_DIR = Path(__file__).resolve().parent
for path in (PROJECT_ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app.ai.client import ModelClient, ModelClientError, classify_error  # noqa: E402
from app.services.errors import TailoringError  # noqa: E402
from app.services.orchestrator import TailoringOrchestrator  # noqa: E402
from fakes import FakeCompletions, FakeDetector, fake_sdk  # noqa: E402


def _client(completions, **kwargs):
    kwargs.setdefault("backoff_s", 0)
    return ModelClient(api_key="sk-test", sdk=fake_sdk(completions), **kwargs)


class ClassifyErrorTests(unittest.TestCase):
    def test_message_heuristics(self):
        self.assertEqual(classify_error(RuntimeError("HTTP 429 Too Many Requests")).kind, "rate_limit")
        self.assertEqual(classify_error(RuntimeError("read timed out")).kind, "timeout")
        self.assertEqual(classify_error(RuntimeError("ECONNREFUSED")).kind, "network_error")
        self.assertEqual(classify_error(RuntimeError("invalid JSON body")).kind, "invalid_response")
        self.assertEqual(classify_error(RuntimeError("boom")).kind, "api_error")

    def test_retryable_kinds(self):
        self.assertTrue(classify_error(TimeoutError()).retryable)
        self.assertTrue(ModelClientError("x", kind="rate_limit").retryable)
        self.assertFalse(ModelClientError("x", kind="invalid_response").retryable)
        self.assertFalse(ModelClientError("x", kind="timeout", retryable=False).retryable)


class ModelClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_content_and_passes_json_mode(self):
        completions = FakeCompletions(['{"ok": true}'])
        reply = await _client(completions, model="gpt-test").call("prompt", json_mode=True, max_tokens=50, temperature=0.2)

        self.assertEqual(reply, '{"ok": true}')
        sent = completions.calls[0]
        self.assertEqual(sent["model"], "gpt-test")
        self.assertEqual(sent["response_format"], {"type": "json_object"})
        self.assertEqual(sent["max_tokens"], 50)
        self.assertEqual(sent["messages"], [{"role": "user", "content": "prompt"}])

    async def test_plain_call_omits_response_format(self):
        completions = FakeCompletions(["hello"])
        await _client(completions).call("prompt")
        self.assertNotIn("response_format", completions.calls[0])

    async def test_retries_retryable_errors_then_succeeds(self):
        completions = FakeCompletions([RuntimeError("rate limit hit"), "done"])
        reply = await _client(completions, max_retries=1).call("prompt")
        self.assertEqual(reply, "done")
        self.assertEqual(len(completions.calls), 2)

    async def test_timeout_is_retried_max_retries_times_then_raised(self):
        completions = FakeCompletions(["late"], delay_s=0.2)
        client = _client(completions, timeout_s=0.01, max_retries=2)

        with self.assertRaises(ModelClientError) as ctx:
            await client.call("prompt")

        self.assertEqual(ctx.exception.kind, "timeout")
        self.assertEqual(len(completions.calls), 3)

    async def test_empty_content_is_not_retried(self):
        completions = FakeCompletions([""])
        with self.assertRaises(ModelClientError) as ctx:
            await _client(completions, max_retries=3).call("prompt")
        self.assertEqual(ctx.exception.kind, "invalid_response")
        self.assertEqual(len(completions.calls), 1)

    async def test_sdk_connection_error_is_network_error(self):
        error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.test/v1/chat/completions"))
        completions = FakeCompletions([error])
        with self.assertRaises(ModelClientError) as ctx:
            await _client(completions, max_retries=0).call("prompt")
        self.assertEqual(ctx.exception.kind, "network_error")

    async def test_missing_api_key_fails_without_retry(self):
        client = ModelClient(api_key="  ", max_retries=3, backoff_s=0)
        with self.assertRaises(ModelClientError) as ctx:
            await client.call("prompt")
        self.assertEqual(ctx.exception.kind, "api_error")

    def test_negative_retries_rejected(self):
        with self.assertRaises(ValueError):
            ModelClient(api_key="sk-test", max_retries=-1)

    async def test_pipeline_surfaces_timeout_kind(self):
        completions = FakeCompletions(["late"], delay_s=0.2)
        client = _client(completions, timeout_s=0.01, max_retries=1)
        orchestrator = TailoringOrchestrator(client, FakeDetector([10]))

        with self.assertRaises(TailoringError) as ctx:
            await orchestrator.tailor("Jane Doe\nSkills\nReact", "Senior React Engineer\n- React")

        self.assertEqual(ctx.exception.kind, "timeout")
        self.assertEqual(len(completions.calls), 2)


if __name__ == "__main__":
    unittest.main()
