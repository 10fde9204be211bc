import unittest

from fastapi.testclient import TestClient

from blog_api.core.config import settings
from blog_api.core.deps import get_post_service
from blog_api.main import app
from blog_api.services.post_service import PostService

POSTS_URL = f"{settings.api_prefix}/post"
CONTENT = "This is a detailed tutorial about building a small blog backend step by step."


def _payload(**overrides):
    payload = {"title": "Building a blog API", "content": CONTENT, "authorId": 1, "categoryId": 1}
    payload.update(overrides)
    return payload


class PostsApiTests(unittest.TestCase):
    def setUp(self):
        self.service = PostService()
        app.dependency_overrides[get_post_service] = lambda: self.service
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    def _create(self, **overrides) -> dict:
        response = self.client.post(POSTS_URL, json=_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_returns_full_post(self):
        body = self._create(tags="api,python", status=1, coverImage="https://example.com/cover.jpg")
        self.assertEqual(body["id"], 1)
        self.assertEqual(body["content"], CONTENT)
        self.assertEqual(body["summary"], CONTENT[:200])
        self.assertEqual(body["tags"], "api,python")
        self.assertEqual(body["viewCount"], 0)
        self.assertIsNotNone(body["publishedAt"])
        self.assertIn("updatedAt", body)

    def test_create_validation_error_envelope(self):
        response = self.client.post(POSTS_URL, json={"title": "abc", "content": CONTENT, "authorId": 0})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["code"], 400)
        self.assertFalse(body["success"])
        self.assertEqual(
            [e["field"] for e in body["errors"]],
            ["title", "authorId", "categoryId"],
        )
        self.assertEqual(body["message"], ", ".join(e["message"] for e in body["errors"]))
        self.assertTrue(body["timestamp"])

    def test_create_rejects_unknown_fields_and_non_objects(self):
        response = self.client.post(POSTS_URL, json=_payload(viewCount=1000))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"], [{"field": "viewCount", "message": "property viewCount should not exist"}])

        response = self.client.post(POSTS_URL, json=["not", "an", "object"])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "body")

    def test_list_envelope_and_summary_projection(self):
        for i in range(3):
            self._create(title=f"Post number {i}")
        response = self.client.get(POSTS_URL, params={"page": 1, "pageSize": 2})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body), {"list", "total", "page", "pageSize", "totalPages"})
        self.assertEqual((body["total"], body["page"], body["pageSize"], body["totalPages"]), (3, 1, 2, 2))
        self.assertEqual(len(body["list"]), 2)
        for row in body["list"]:
            self.assertNotIn("content", row)
            self.assertNotIn("updatedAt", row)
            self.assertIn("summary", row)

    def test_list_filters_and_sorting(self):
        self._create(title="Python basics", categoryId=1, status=1)
        self._create(title="Python advanced", categoryId=2, status=1, isTop=True)
        self._create(title="Go basics", categoryId=2, status=0)
        self.client.get(f"{POSTS_URL}/3")

        body = self.client.get(POSTS_URL, params={"keyword": "Python", "categoryId": 2}).json()
        self.assertEqual([row["id"] for row in body["list"]], [2])

        body = self.client.get(POSTS_URL, params={"isTop": "false", "sortBy": "viewCount", "sortOrder": "DESC"}).json()
        self.assertEqual([row["id"] for row in body["list"]], [3, 1])

    def test_list_rejects_bad_window(self):
        for params in ({"page": 0}, {"pageSize": 101}, {"sortOrder": "sideways"}):
            response = self.client.get(POSTS_URL, params=params)
            self.assertEqual(response.status_code, 400, params)
            self.assertFalse(response.json()["success"])

    def test_page_past_the_end(self):
        self._create()
        body = self.client.get(POSTS_URL, params={"page": 5}).json()
        self.assertEqual(body["list"], [])
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["totalPages"], 1)

    def test_detail_counts_views(self):
        self._create()
        self.assertEqual(self.client.get(f"{POSTS_URL}/1").json()["viewCount"], 1)
        self.assertEqual(self.client.get(f"{POSTS_URL}/1").json()["viewCount"], 2)

    def test_detail_not_found(self):
        response = self.client.get(f"{POSTS_URL}/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["detail"], "Post #999 not found")

    def test_non_integer_id_is_a_client_error(self):
        response = self.client.get(f"{POSTS_URL}/abc")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errors"][0]["field"], "id")

    def test_patch_publishes(self):
        self._create()
        response = self.client.patch(f"{POSTS_URL}/1", json={"status": 1, "title": "Now it is public"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], 1)
        self.assertEqual(body["title"], "Now it is public")
        self.assertIsNotNone(body["publishedAt"])
        self.assertEqual(body["viewCount"], 0)

    def test_patch_empty_body_is_rejected(self):
        self._create()
        self.assertEqual(self.client.patch(f"{POSTS_URL}/1", json={}).status_code, 400)
        self.assertEqual(self.client.patch(f"{POSTS_URL}/9", json={"tags": "x"}).status_code, 404)

    def test_delete_withdraws_post(self):
        self._create(status=1)
        response = self.client.delete(f"{POSTS_URL}/1")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Post deleted"})

        self.assertEqual(self.client.get(f"{POSTS_URL}/1").json()["status"], 2)
        self.assertEqual(self.client.get(POSTS_URL, params={"status": 1}).json()["total"], 0)
        self.assertEqual(self.client.get(POSTS_URL, params={"status": 2}).json()["total"], 1)
        self.assertEqual(self.client.delete(f"{POSTS_URL}/2").status_code, 404)


if __name__ == "__main__":
    unittest.main()
