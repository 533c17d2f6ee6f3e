"""Truth tables for the role policy predicates."""

import uuid

from django.test import SimpleTestCase

from access_control import policy
from access_control.models import Role


class PolicyTests(SimpleTestCase):
    def setUp(self):
        self.editor_id = uuid.uuid4()
        self.other_id = uuid.uuid4()

    def test_plain_user_has_no_management_rights(self):
        for predicate in (
            policy.can_manage_categories,
            policy.can_manage_users,
            policy.can_approve_pending_review,
            policy.can_manage_global_seo,
            policy.can_view_visitor_analytics,
            policy.can_view_article_list,
            policy.can_create_article,
        ):
            self.assertFalse(predicate(Role.USER), predicate.__name__)

    def test_editor_modifies_only_own_articles(self):
        self.assertFalse(policy.can_modify_article(Role.EDITOR, self.editor_id, self.other_id))
        self.assertTrue(policy.can_modify_article(Role.EDITOR, self.editor_id, self.editor_id))
        self.assertFalse(policy.can_delete_article(Role.EDITOR, self.editor_id, self.other_id))
        self.assertTrue(policy.can_delete_article(Role.EDITOR, self.editor_id, self.editor_id))

    def test_editor_without_identity_owns_nothing(self):
        self.assertFalse(policy.can_modify_article(Role.EDITOR, None, None))

    def test_admin_modifies_any_article(self):
        self.assertTrue(policy.can_modify_article(Role.ADMIN, self.editor_id, self.other_id))
        self.assertTrue(policy.can_modify_article(Role.ADMIN, self.editor_id, None))
        self.assertTrue(policy.can_view_article(Role.ADMIN, None, self.other_id))

    def test_user_modifies_nothing(self):
        self.assertFalse(policy.can_modify_article(Role.USER, self.editor_id, self.editor_id))
        self.assertFalse(policy.can_view_article(Role.USER, self.editor_id, self.editor_id))

    def test_publishing_is_admin_only(self):
        self.assertFalse(policy.can_set_status(Role.EDITOR, "published"))
        self.assertFalse(policy.can_set_status(Role.USER, "published"))
        self.assertTrue(policy.can_set_status(Role.ADMIN, "published"))

    def test_review_submission_is_editor_only(self):
        self.assertTrue(policy.can_set_status(Role.EDITOR, "pending_review"))
        self.assertFalse(policy.can_set_status(Role.ADMIN, "pending_review"))
        self.assertFalse(policy.can_set_status(Role.USER, "pending_review"))

    def test_staff_may_return_to_draft(self):
        self.assertTrue(policy.can_set_status(Role.EDITOR, "draft"))
        self.assertTrue(policy.can_set_status(Role.ADMIN, "draft"))
        self.assertFalse(policy.can_set_status(Role.USER, "draft"))
        self.assertFalse(policy.can_set_status(Role.ADMIN, "archived"))

    def test_admin_only_predicates(self):
        self.assertTrue(policy.can_manage_categories(Role.ADMIN))
        self.assertFalse(policy.can_manage_categories(Role.EDITOR))
        self.assertTrue(policy.can_approve_pending_review(Role.ADMIN))
        self.assertFalse(policy.can_approve_pending_review(Role.EDITOR))
        self.assertTrue(policy.can_manage_users(Role.ADMIN))
        self.assertFalse(policy.can_manage_users(Role.EDITOR))
