import logging
import unittest

from fastapi.testclient import TestClient

from blog_api.core.config import settings
from blog_api.core.deps import get_post_service
from blog_api.core.request_tracking import (
    NO_REQUEST_ID,
    RequestIdLogFilter,
    current_request_id,
    pick_request_id,
)
from blog_api.main import app
from blog_api.services.post_service import PostService

POSTS_URL = f"{settings.api_prefix}/post"
CONTENT = "A walkthrough of correlating log lines with the request that produced them."


class _RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []
        self.addFilter(RequestIdLogFilter())

    def emit(self, record):
        self.records.append(record)


class PickRequestIdTests(unittest.TestCase):
    def test_short_token_is_kept(self):
        self.assertEqual(pick_request_id("  trace-42_a.b "), "trace-42_a.b")

    def test_missing_or_odd_values_get_a_fresh_id(self):
        for inbound in (None, "", "has spaces", "x" * 129, "semi;colon"):
            picked = pick_request_id(inbound)
            self.assertRegex(picked, r"^[0-9a-f]{32}$", inbound)

    def test_filter_outside_a_request_uses_placeholder(self):
        record = logging.LogRecord("blog_api.test", logging.INFO, __file__, 1, "msg", None, None)
        RequestIdLogFilter().filter(record)
        self.assertEqual(record.request_id, NO_REQUEST_ID)
        self.assertEqual(current_request_id(), NO_REQUEST_ID)


class RequestTrackingApiTests(unittest.TestCase):
    def setUp(self):
        self.service = PostService()
        app.dependency_overrides[get_post_service] = lambda: self.service
        self.client = TestClient(app)

        self.collector = _RecordCollector()
        self.logger = logging.getLogger("blog_api")
        self.previous_level = self.logger.level
        self.logger.setLevel(logging.INFO)
        self.logger.addHandler(self.collector)

    def tearDown(self):
        self.logger.removeHandler(self.collector)
        self.logger.setLevel(self.previous_level)
        self.client.close()
        app.dependency_overrides.clear()

    def test_response_headers(self):
        response = self.client.get(POSTS_URL, headers={"X-Request-ID": "list-call-1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["x-request-id"], "list-call-1")
        self.assertEqual(response.headers["cache-control"], "no-store")

        response = self.client.get("/health", headers={"X-Request-ID": "bad id"})
        self.assertNotEqual(response.headers["x-request-id"], "bad id")

    def test_service_log_records_carry_the_request_id(self):
        payload = {"title": "Tracing a write", "content": CONTENT, "authorId": 1, "categoryId": 1}
        response = self.client.post(POSTS_URL, json=payload, headers={"X-Request-ID": "create-7"})
        self.assertEqual(response.status_code, 201)

        by_logger = {r.name: r for r in self.collector.records}
        self.assertEqual(by_logger["blog_api.services.post_service"].request_id, "create-7")
        access = by_logger["blog_api.http"]
        self.assertEqual(access.request_id, "create-7")
        self.assertIn("status=201", access.getMessage())

    def test_validation_envelope_names_the_request(self):
        response = self.client.post(POSTS_URL, json={"title": "abc"}, headers={"X-Request-ID": "bad-post-3"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["requestId"], "bad-post-3")

        response = self.client.get(f"{POSTS_URL}/not-a-number")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["requestId"], response.headers["x-request-id"])

    def test_landing_and_health(self):
        self.assertIn(settings.APP_NAME, self.client.get("/").text)
        self.assertEqual(self.client.get("/health").json(), {"status": "ok", "env": settings.APP_ENV})

    def test_request_id_does_not_leak_past_the_request(self):
        self.client.get("/health", headers={"X-Request-ID": "short-lived"})
        self.assertEqual(current_request_id(), NO_REQUEST_ID)


if __name__ == "__main__":
    unittest.main()
