"""View counting, popularity ranking and the public reader API."""

import uuid
from datetime import timedelta
from unittest import mock

import redis
from django.utils import timezone
from rest_framework.exceptions import NotFound

from articles.counters import ViewCounter, ViewTrackingUnavailable
from articles.models import Article, ArticleStatus
from articles.popularity import category_popularity, popular_articles, popularity_cache
from tests.utils import NewsroomTestCase, create_article


class ViewCounterTests(NewsroomTestCase):
    def setUp(self):
        super().setUp()
        self.article = create_article(self.editor, title="Counted", status=ArticleStatus.PUBLISHED)
        self.counter = ViewCounter(redis_client=self.fake_redis)

    def _count(self):
        return Article.objects.get(pk=self.article.pk).view_count

    def test_same_session_counts_once(self):
        self.assertTrue(self.counter.record_view(self.article.id, "session-a"))
        self.assertFalse(self.counter.record_view(self.article.id, "session-a"))
        self.assertEqual(self._count(), 1)

    def test_distinct_sessions_each_count(self):
        tokens = [f"session-{i}" for i in range(7)]
        for token in tokens + tokens:
            self.counter.record_view(self.article.id, token)
        self.assertEqual(self._count(), len(tokens))

    def test_unknown_article_releases_claim(self):
        missing = uuid.uuid4()
        with self.assertRaises(NotFound):
            self.counter.record_view(missing, "session-a")
        self.assertIsNone(self.fake_redis.get(f"views:seen:{missing}:session-a"))

    def test_redis_failure_is_unavailable(self):
        broken = mock.Mock()
        broken.set.side_effect = redis.ConnectionError("down")
        with self.assertRaises(ViewTrackingUnavailable):
            ViewCounter(redis_client=broken).record_view(self.article.id, "session-a")
        self.assertEqual(self._count(), 0)


class PopularityTests(NewsroomTestCase):
    def setUp(self):
        super().setUp()
        base = timezone.now() - timedelta(days=1)
        self.articles = []
        for index, views in enumerate([10, 50, 5, 50], start=1):
            article = create_article(
                self.editor,
                title=f"Story {index}",
                status=ArticleStatus.PUBLISHED,
                published_at=base,
                view_count=views,
                category="sports" if index % 2 else "politics",
            )
            Article.objects.filter(pk=article.pk).update(created_at=base + timedelta(minutes=index))
            self.articles.append(article)

    def test_descending_views_with_stable_ties(self):
        ranked = [a.id for a in popular_articles(3)]
        first, second, third, fourth = (a.id for a in self.articles)
        self.assertEqual(ranked, [second, fourth, first])
        self.assertEqual(len(popular_articles(10)), 4)
        self.assertNotIn(third, ranked)

    def test_drafts_are_not_popular(self):
        create_article(self.editor, title="Hidden", view_count=999)
        self.assertNotIn("Hidden", [a.title for a in popular_articles(10)])

    def test_category_popularity(self):
        stats = category_popularity()
        self.assertEqual(stats["sports"], {"total_views": 15, "article_count": 2})
        self.assertEqual(stats["politics"], {"total_views": 100, "article_count": 2})

    def test_cache_invalidated_by_recorded_view(self):
        self.assertEqual(popularity_cache.popular_ids(1), [str(self.articles[1].id)])

        counter = ViewCounter(redis_client=self.fake_redis)
        for i in range(60):
            counter.record_view(self.articles[2].id, f"reader-{i}")

        self.assertEqual(popularity_cache.popular_ids(1), [str(self.articles[2].id)])


class NewsApiTests(NewsroomTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        now = timezone.now()
        cls.older = create_article(
            cls.editor, title="Older", status=ArticleStatus.PUBLISHED,
            published_at=now - timedelta(hours=2), category="sports", is_breaking=True,
        )
        cls.newer = create_article(
            cls.editor, title="Newer", status=ArticleStatus.PUBLISHED,
            published_at=now - timedelta(hours=1), is_featured=True,
        )
        cls.draft = create_article(cls.editor, title="Unpublished")

    def test_list_shows_published_newest_first(self):
        response = self.anon.get("/news/")
        titles = [row["title"] for row in response.json()["data"]]
        self.assertEqual(titles, ["Newer", "Older"])

    def test_category_filter(self):
        response = self.anon.get("/news/", {"category": "sports"})
        self.assertEqual([row["title"] for row in response.json()["data"]], ["Older"])

    def test_draft_not_visible(self):
        self.assertEqual(self.anon.get(f"/news/{self.draft.slug}/").status_code, 404)

    def test_detail_by_slug(self):
        response = self.anon.get(f"/news/{self.older.slug}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["category_label"], "खेल")

    def test_breaking_and_featured(self):
        breaking = self.anon.get("/news/breaking/").json()["data"]
        self.assertEqual([row["title"] for row in breaking], ["Older"])
        featured = self.anon.get("/news/featured/").json()["data"]
        self.assertEqual(featured["title"], "Newer")

    def test_record_and_read_views(self):
        url = f"/news/{self.older.slug}/views/"
        first = self.anon.post(url, {"session": "tab-1"}, format="json").json()["data"]
        repeat = self.anon.post(url, {"session": "tab-1"}, format="json").json()["data"]

        self.assertEqual(first, {"counted": True, "view_count": 1})
        self.assertEqual(repeat, {"counted": False, "view_count": 1})
        self.assertEqual(self.anon.get(url).json()["data"], {"view_count": 1})

    def test_record_view_requires_session(self):
        response = self.anon.post(f"/news/{self.older.slug}/views/", {}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_view_tracking_outage_is_503(self):
        with mock.patch.object(ViewCounter, "record_view", side_effect=ViewTrackingUnavailable()):
            response = self.anon.post(f"/news/{self.older.slug}/views/", {"session": "s"}, format="json")
        self.assertEqual(response.status_code, 503)
        self.assertIsNone(response.json()["data"])

    def test_popular_and_category_stats(self):
        Article.objects.filter(pk=self.older.pk).update(view_count=5)
        popular = self.anon.get("/news/popular/", {"limit": 1}).json()["data"]
        self.assertEqual([row["title"] for row in popular], ["Older"])

        stats = self.anon.get("/news/category-stats/").json()["data"]
        self.assertEqual(stats["sports"]["total_views"], 5)

    def test_category_stats_ignore_unpublished(self):
        create_article(self.editor, title="Health draft", category="health", view_count=40)
        create_article(
            self.editor, title="Health review", status=ArticleStatus.PENDING_REVIEW, category="health"
        )

        stats = self.anon.get("/news/category-stats/").json()["data"]
        self.assertNotIn("health", stats)
        self.assertEqual(stats["national"]["article_count"], 1)
