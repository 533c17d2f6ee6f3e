"""Read-only visitor analytics."""

import uuid

from django.test import override_settings

from analytics.models import VisitorRecord
from tests.utils import NewsroomTestCase, client_for


class VisitorAnalyticsTests(NewsroomTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.member_id = uuid.uuid4()
        VisitorRecord.objects.create(ip_address="10.0.0.1", device_type="mobile", visitor_name="Asha")
        VisitorRecord.objects.create(ip_address="10.0.0.2", device_type="desktop", user_id=cls.member_id)
        VisitorRecord.objects.create(ip_address="10.0.0.1", device_type="desktop", is_subscribed_push=True)

    def test_admin_lists_visits(self):
        response = client_for(self.admin).get("/visitors/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["data"]), 3)

    def test_editor_forbidden(self):
        self.assertEqual(client_for(self.editor).get("/visitors/").status_code, 403)

    def test_filters(self):
        client = client_for(self.admin)
        by_device = client.get("/visitors/", {"device": "mobile"}).json()["data"]
        self.assertEqual([row["visitor_name"] for row in by_device], ["Asha"])

        by_ip = client.get("/visitors/", {"q": "10.0.0.2", "field": "ip"}).json()["data"]
        self.assertEqual(len(by_ip), 1)

        by_name = client.get("/visitors/", {"q": "ash", "field": "name"}).json()["data"]
        self.assertEqual(len(by_name), 1)

        by_user = client.get("/visitors/", {"q": str(self.member_id), "field": "user"}).json()["data"]
        self.assertEqual(len(by_user), 1)

    @override_settings(VISITOR_LOG_PAGE_LIMIT=2)
    def test_list_is_capped(self):
        self.assertEqual(len(client_for(self.admin).get("/visitors/").json()["data"]), 2)

    def test_summary(self):
        data = client_for(self.admin).get("/visitors/summary/").json()["data"]
        self.assertEqual(data["total"], 3)
        self.assertEqual(data["unique_ips"], 2)
        self.assertEqual(data["by_device"], {"mobile": 1, "desktop": 2})
        self.assertEqual(data["push_subscribers"], 1)

    def test_read_only(self):
        response = client_for(self.admin).post("/visitors/", {"ip_address": "1.1.1.1"}, format="json")
        self.assertEqual(response.status_code, 405)
