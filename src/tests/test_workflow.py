"""Article state machine rules, exercised directly through ArticleWorkflow."""

from datetime import datetime, timedelta, timezone as dt_timezone
from unittest import mock

from rest_framework.exceptions import PermissionDenied, ValidationError

from access_control.models import Role
from access_control.resolver import Actor
from articles.models import Article, ArticleStatus
from articles.workflow import ArticleWorkflow
from categories.models import Category
from tests.utils import NewsroomTestCase, create_article

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=dt_timezone.utc)


class ArticleWorkflowTests(NewsroomTestCase):
    def setUp(self):
        super().setUp()
        self.workflow = ArticleWorkflow(clock=lambda: FIXED_NOW)
        self.admin_actor = Actor(self.admin.id, Role.ADMIN)
        self.editor_actor = Actor(self.editor.id, Role.EDITOR)
        self.other_editor_actor = Actor(self.other_editor.id, Role.EDITOR)
        self.reader_actor = Actor(self.reader.id, Role.USER)

    def _draft(self, author=None, **fields):
        return create_article(author or self.editor, title="Draft story", **fields)

    def test_create_draft_has_no_published_at(self):
        article = self.workflow.create(self.editor_actor, {"title": "चुनाव", "content": "Body", "category": "politics"})

        self.assertEqual(article.status, ArticleStatus.DRAFT)
        self.assertIsNone(article.published_at)
        self.assertEqual(article.author_id, self.editor.id)
        self.assertTrue(article.slug.startswith("चुनाव-"))

    def test_create_defaults_category(self):
        article = self.workflow.create(self.editor_actor, {"title": "T", "content": "Body"})
        self.assertEqual(article.category, "national")

    def test_create_rejects_unknown_category(self):
        with self.assertRaises(ValidationError):
            self.workflow.create(self.editor_actor, {"title": "T", "content": "B", "category": "astrology"})
        self.assertFalse(Article.objects.exists())

    def test_create_requires_title_and_content(self):
        with self.assertRaises(ValidationError) as ctx:
            self.workflow.create(self.editor_actor, {"title": " ", "content": ""})
        self.assertIn("title", ctx.exception.detail)
        self.assertIn("content", ctx.exception.detail)

    def test_reader_cannot_create(self):
        with self.assertRaises(PermissionDenied):
            self.workflow.create(self.reader_actor, {"title": "T", "content": "B"})

    def test_admin_creates_published_directly(self):
        article = self.workflow.create(
            self.admin_actor, {"title": "Live", "content": "B", "status": "published"}
        )
        self.assertEqual(article.status, ArticleStatus.PUBLISHED)
        self.assertEqual(article.published_at, FIXED_NOW)

    def test_editor_cannot_create_published(self):
        with self.assertRaises(PermissionDenied):
            self.workflow.create(self.editor_actor, {"title": "Live", "content": "B", "status": "published"})
        self.assertFalse(Article.objects.filter(status=ArticleStatus.PUBLISHED).exists())

    def test_editor_may_create_straight_into_review(self):
        article = self.workflow.create(
            self.editor_actor, {"title": "Ready", "content": "B", "status": "pending_review"}
        )
        self.assertEqual(article.status, ArticleStatus.PENDING_REVIEW)

    def test_editor_submits_own_draft(self):
        article = self._draft()
        self.workflow.change_status(self.editor_actor, article, "pending_review")

        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.PENDING_REVIEW)
        self.assertIsNone(article.published_at)

    def test_other_editor_cannot_submit(self):
        article = self._draft()
        with self.assertRaises(PermissionDenied):
            self.workflow.change_status(self.other_editor_actor, article, "pending_review")
        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.DRAFT)

    def test_editor_cannot_publish_own_draft(self):
        article = self._draft()
        with self.assertRaises(PermissionDenied):
            self.workflow.change_status(self.editor_actor, article, "published")

    def test_admin_approves_pending_review(self):
        article = self._draft(status=ArticleStatus.PENDING_REVIEW)
        self.workflow.change_status(self.admin_actor, article, "published")

        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.PUBLISHED)
        self.assertEqual(article.published_at, FIXED_NOW)

    def test_admin_cannot_submit_for_review(self):
        article = self._draft(author=self.admin)
        with self.assertRaises(PermissionDenied):
            self.workflow.change_status(self.admin_actor, article, "pending_review")

    def test_published_cannot_go_back_to_review(self):
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=FIXED_NOW)
        with self.assertRaises(ValidationError):
            self.workflow.change_status(self.editor_actor, article, "pending_review")

    def test_republish_restamps(self):
        earlier = FIXED_NOW - timedelta(days=3)
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=earlier)
        self.workflow.change_status(self.admin_actor, article, "published")

        article.refresh_from_db()
        self.assertEqual(article.published_at, FIXED_NOW)

    def test_update_echoing_published_status_keeps_published_at(self):
        earlier = FIXED_NOW - timedelta(days=3)
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=earlier)
        self.workflow.update(self.admin_actor, article, {"title": "Typo fixed", "status": "published"})

        article.refresh_from_db()
        self.assertEqual(article.title, "Typo fixed")
        self.assertEqual(article.published_at, earlier)

    def test_author_editor_may_echo_published_status(self):
        earlier = FIXED_NOW - timedelta(days=3)
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=earlier)
        self.workflow.update(self.editor_actor, article, {"excerpt": "Short", "status": "published"})

        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.PUBLISHED)
        self.assertEqual(article.published_at, earlier)

    def test_same_title_in_same_millisecond_gets_distinct_slugs(self):
        data = {"title": "Budget day", "content": "Body", "category": "business"}
        with mock.patch("articles.slugs.time.time", return_value=1714555800.0):
            first = self.workflow.create(self.editor_actor, data)
            second = self.workflow.create(self.editor_actor, data)

        self.assertEqual(first.slug, "budget-day-1714555800000")
        self.assertEqual(second.slug, "budget-day-1714555800000-2")

    def test_revert_to_draft_keeps_published_at(self):
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=FIXED_NOW)
        self.workflow.change_status(self.editor_actor, article, "draft")

        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.DRAFT)
        self.assertEqual(article.published_at, FIXED_NOW)

    def test_revert_to_draft_can_clear_published_at(self):
        workflow = ArticleWorkflow(clock=lambda: FIXED_NOW, clear_published_at_on_unpublish=True)
        article = self._draft(status=ArticleStatus.PUBLISHED, published_at=FIXED_NOW)
        workflow.change_status(self.admin_actor, article, "draft")

        article.refresh_from_db()
        self.assertIsNone(article.published_at)

    def test_resending_same_status_is_noop(self):
        article = self._draft(status=ArticleStatus.PENDING_REVIEW)
        self.workflow.change_status(self.editor_actor, article, "pending_review")
        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.PENDING_REVIEW)

    def test_transition_requires_existing_category(self):
        article = self._draft(category="sports")
        Category.objects.filter(name="sports").delete()

        with self.assertRaises(ValidationError):
            self.workflow.change_status(self.editor_actor, article, "pending_review")
        article.refresh_from_db()
        self.assertEqual(article.status, ArticleStatus.DRAFT)

    def test_update_with_status_is_atomic(self):
        article = self._draft()
        with self.assertRaises(PermissionDenied):
            self.workflow.update(self.editor_actor, article, {"title": "Changed", "status": "published"})

        article.refresh_from_db()
        self.assertEqual(article.title, "Draft story")
        self.assertEqual(article.status, ArticleStatus.DRAFT)

    def test_update_seo_fields(self):
        article = self._draft()
        self.workflow.update(
            self.editor_actor, article, {"seo_title": "SEO", "keywords": ["a", "b"]}
        )
        article.refresh_from_db()
        self.assertEqual(article.seo_title, "SEO")
        self.assertEqual(article.keywords, ["a", "b"])

    def test_delete_rules(self):
        article = self._draft()
        with self.assertRaises(PermissionDenied):
            self.workflow.delete(self.other_editor_actor, article)

        self.workflow.delete(self.editor_actor, article)
        self.assertFalse(Article.objects.filter(pk=article.pk).exists())
