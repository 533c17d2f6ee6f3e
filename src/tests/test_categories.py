"""Category registry endpoints and the deleted-category fallback."""

from articles.models import Article, ArticleStatus
from categories.models import Category
from categories.repositories import CategoryRepository
from tests.utils import NewsroomTestCase, client_for, create_article


class CategoryTests(NewsroomTestCase):
    def test_public_list_hides_inactive(self):
        Category.objects.filter(name="health").update(is_active=False)

        public = [row["name"] for row in self.anon.get("/categories/").json()["data"]]
        admin = [row["name"] for row in client_for(self.admin).get("/categories/").json()["data"]]

        self.assertNotIn("health", public)
        self.assertIn("health", admin)
        self.assertEqual(public[0], "politics")

    def test_admin_creates_category(self):
        response = client_for(self.admin).post(
            "/categories/", {"name": "Science", "label": "विज्ञान"}, format="json"
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["data"]["name"], "science")

    def test_duplicate_name_differing_in_case_is_400(self):
        response = client_for(self.admin).post(
            "/categories/", {"name": "Sports", "label": "Sports"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(Category.objects.filter(name="sports").count(), 1)

    def test_writes_go_through_repository(self):
        client = client_for(self.admin)
        with self.assertLogs("categories.repositories", level="INFO") as logs:
            client.post("/categories/", {"name": "science", "label": "विज्ञान"}, format="json")
            client.delete("/categories/science/")

        self.assertEqual(
            logs.output,
            [
                "INFO:categories.repositories:Created category science",
                "INFO:categories.repositories:Deleted category science",
            ],
        )
        self.assertFalse(Category.objects.filter(name="science").exists())

    def test_editor_cannot_create_category(self):
        response = client_for(self.editor).post(
            "/categories/", {"name": "science", "label": "विज्ञान"}, format="json"
        )
        self.assertEqual(response.status_code, 403)

    def test_name_is_immutable(self):
        response = client_for(self.admin).patch(
            "/categories/sports/", {"name": "cricket"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertTrue(Category.objects.filter(name="sports").exists())

    def test_label_is_editable(self):
        response = client_for(self.admin).patch("/categories/sports/", {"label": "Sports"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(CategoryRepository().label_for("sports"), "Sports")

    def test_unknown_lookup_returns_none(self):
        repo = CategoryRepository()
        self.assertIsNone(repo.get("astrology"))
        self.assertEqual(repo.label_for("astrology"), "astrology")

    def test_deleting_category_keeps_articles(self):
        article = create_article(self.editor, title="Match report", status=ArticleStatus.PUBLISHED, category="sports")

        response = client_for(self.admin).delete("/categories/sports/")
        self.assertEqual(response.status_code, 204)

        article = Article.objects.get(pk=article.pk)
        self.assertEqual(article.category, "sports")
        detail = self.anon.get(f"/news/{article.slug}/").json()["data"]
        self.assertEqual(detail["category"], "sports")
        self.assertEqual(detail["category_label"], "sports")
