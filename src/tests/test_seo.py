"""Global SEO settings."""

from seo.models import DEFAULT_SEO_SETTINGS, SEOSetting
from tests.utils import NewsroomTestCase, client_for


class SEOSettingsTests(NewsroomTestCase):
    def test_defaults_without_rows(self):
        response = self.anon.get("/seo-settings/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], DEFAULT_SEO_SETTINGS)

    def test_stored_values_override_defaults(self):
        SEOSetting.objects.create(setting_key="site_name", setting_value="Daily Wire")
        SEOSetting.objects.create(setting_key="legacy_key", setting_value="ignored")

        data = self.anon.get("/seo-settings/").json()["data"]
        self.assertEqual(data["site_name"], "Daily Wire")
        self.assertEqual(data["site_description"], DEFAULT_SEO_SETTINGS["site_description"])
        self.assertNotIn("legacy_key", data)

    def test_admin_updates(self):
        response = client_for(self.admin).patch(
            "/seo-settings/", {"google_analytics_id": "G-123"}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["google_analytics_id"], "G-123")
        self.assertEqual(SEOSetting.objects.get(setting_key="google_analytics_id").setting_value, "G-123")

    def test_unknown_key_rejected(self):
        response = client_for(self.admin).patch("/seo-settings/", {"theme": "dark"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(SEOSetting.objects.exists())

    def test_editor_cannot_update(self):
        response = client_for(self.editor).patch("/seo-settings/", {"site_name": "X"}, format="json")
        self.assertEqual(response.status_code, 403)
