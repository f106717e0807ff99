# content/tests/test_services.py

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings

from content.models import ChallanTemplate, HomepageContent, NotificationDismissal, PaymentSetting, SiteSetting
from content.services import challan_templates, notifications, payment_settings, site_settings
from products.models import Category

User = get_user_model()


class NotificationDismissalTests(TestCase):
    """
    GUARANTEES:
    - a dismissal persists across reads for the same owner
    - dismissing twice is a no-op
    - owners are isolated (client ids, users)
    """

    def setUp(self):
        for i, name in enumerate(["Sparklers", "Flower Pots", "Rockets", "Bombs", "Fancy Shots"]):
            Category.objects.create(name=name, display_order=i)
        Category.objects.create(name="Retired", status=Category.STATUS_INACTIVE)

    def test_category_preview(self):
        payload = notifications.category_updates(client_id="c1")
        self.assertTrue(payload["show"])
        self.assertEqual(payload["categories"], ["Sparklers", "Flower Pots", "Rockets"])
        self.assertEqual(payload["more_count"], 2)
        self.assertEqual(payload["total_categories"], 5)

    def test_dismissal_persists(self):
        key = NotificationDismissal.KEY_CATEGORY_UPDATES
        notifications.dismiss(key, client_id="c1")

        payload = notifications.category_updates(client_id="c1")
        self.assertFalse(payload["show"])
        self.assertTrue(payload["dismissed"])
        self.assertTrue(NotificationDismissal.objects.filter(client_id="c1").exists())

    def test_dismiss_is_idempotent(self):
        key = NotificationDismissal.KEY_CATEGORY_UPDATES
        first = notifications.dismiss(key, client_id="c1")
        second = notifications.dismiss(key, client_id="c1")
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(NotificationDismissal.objects.count(), 1)

    def test_owners_are_isolated(self):
        key = NotificationDismissal.KEY_CATEGORY_UPDATES
        user = User.objects.create_user(email="buyer@example.com", password="pass1234")
        notifications.dismiss(key, user=user)

        self.assertTrue(notifications.is_dismissed(key, user=user))
        self.assertFalse(notifications.is_dismissed(key, client_id="c2"))

    def test_no_owner_never_dismissed(self):
        self.assertFalse(notifications.is_dismissed(NotificationDismissal.KEY_CATEGORY_UPDATES))


class SiteSettingsServiceTests(TestCase):
    def test_upsert_by_key(self):
        site_settings.upsert_settings([{"key": "site_name", "value": "Hello Crackers", "description": "Name"}])
        site_settings.upsert_settings([{"key": "site_name", "value": "Hello Crackers Sivakasi"}])

        row = SiteSetting.objects.get(key="site_name")
        self.assertEqual(row.value, "Hello Crackers Sivakasi")
        self.assertEqual(row.description, "Name")

    def test_countdown_hidden_without_target(self):
        SiteSetting.objects.create(key="countdown_title", value="Diwali Sale")
        self.assertIsNone(site_settings.countdown_payload())

    def test_countdown_hidden_when_inactive(self):
        SiteSetting.objects.create(key="countdown_target_date", value="2026-11-08T00:00:00")
        SiteSetting.objects.create(key="countdown_is_active", value="false")
        self.assertIsNone(site_settings.countdown_payload())

    def test_countdown_active(self):
        SiteSetting.objects.create(key="countdown_target_date", value="2026-11-08T00:00:00")
        SiteSetting.objects.create(key="countdown_festival_name", value="Diwali")

        payload = site_settings.countdown_payload()
        self.assertEqual(payload["festival_name"], "Diwali")
        self.assertTrue(payload["is_active"])

    @override_settings(MINIMUM_ORDER_AMOUNT="2500.00")
    def test_minimum_order_fallbacks(self):
        self.assertEqual(str(site_settings.minimum_order_amount()), "2500.00")

        SiteSetting.objects.create(key="minimum_order", value="abc")
        self.assertEqual(str(site_settings.minimum_order_amount()), "2500.00")

        for value in ("Infinity", "NaN", "-5"):
            SiteSetting.objects.filter(key="minimum_order").update(value=value)
            self.assertEqual(str(site_settings.minimum_order_amount()), "2500.00")

    def test_public_payload_has_only_active_sections(self):
        HomepageContent.objects.create(section_name="hero", content={"title": "Light up"})
        HomepageContent.objects.create(section_name="old", content={}, is_active=False)

        payload = site_settings.public_site_payload()
        self.assertEqual(list(payload["homepage"]), ["hero"])
        self.assertIn("minimum_order", payload["settings"])
        self.assertIsNone(payload["countdown"])


@override_settings(PAYMENTS={"RAZORPAY": {"KEY_ID": "", "KEY_SECRET": "", "WEBHOOK_SECRET": "", "CURRENCY": "INR"}})
class PaymentSettingsServiceTests(TestCase):
    def test_secrets_masked_for_admin(self):
        PaymentSetting.objects.create(key="razorpay_key_secret", value="supersecret1234")

        rows = {r["key"]: r for r in payment_settings.admin_payment_settings()}
        self.assertEqual(rows["razorpay_key_secret"]["value"], "********1234")
        self.assertTrue(rows["razorpay_key_secret"]["is_secret"])
        self.assertEqual(rows["payment_instructions"]["value"], payment_settings.DEFAULT_PAYMENT_INSTRUCTIONS)

    def test_masked_value_keeps_stored_secret(self):
        PaymentSetting.objects.create(key="razorpay_key_secret", value="supersecret1234")

        written = payment_settings.upsert_payment_settings(
            [
                {"key": "razorpay_key_secret", "value": "********1234"},
                {"key": "bank_name", "value": "Indian Bank"},
            ]
        )

        self.assertEqual(written, ["bank_name"])
        self.assertEqual(PaymentSetting.objects.get(key="razorpay_key_secret").value, "supersecret1234")

    def test_public_info_never_has_secrets(self):
        PaymentSetting.objects.create(key="razorpay_key_id", value="rzp_test_abc")
        PaymentSetting.objects.create(key="razorpay_key_secret", value="supersecret1234")
        PaymentSetting.objects.create(key="razorpay_enabled", value="true")

        info = payment_settings.public_payment_info()
        self.assertTrue(info["razorpay_enabled"])
        self.assertEqual(info["razorpay_key_id"], "rzp_test_abc")
        self.assertNotIn("supersecret1234", str(info))

    def test_enabled_requires_both_keys(self):
        PaymentSetting.objects.create(key="razorpay_enabled", value="true")
        PaymentSetting.objects.create(key="razorpay_key_id", value="rzp_test_abc")
        self.assertFalse(payment_settings.razorpay_credentials()["enabled"])


class ChallanTemplateTests(TestCase):
    def test_default_created_on_first_use(self):
        template = challan_templates.get_default_template()
        self.assertTrue(template.is_default)
        self.assertEqual(template.template_data["challan_settings"]["prefix"], "CH")

    def test_only_one_default_per_type(self):
        data = challan_templates.default_template_data()
        first = ChallanTemplate.objects.create(name="A", is_default=True, template_data=data)
        second = ChallanTemplate.objects.create(name="B", is_default=True, template_data=data)

        first.refresh_from_db()
        self.assertFalse(first.is_default)
        self.assertEqual(challan_templates.get_default_template().pk, second.pk)

    def test_missing_sections_rejected(self):
        template = ChallanTemplate(name="Broken", template_data={"company_info": {}})
        with self.assertRaises(ValidationError):
            template.full_clean()

    def test_merge_fills_missing_keys(self):
        template = ChallanTemplate(
            name="Partial",
            template_data={"company_info": {"name": "Sri Crackers"}, "challan_settings": {}, "fields": {}, "footer": {}},
        )
        merged = challan_templates.merged_template_data(template)
        self.assertEqual(merged["company_info"]["name"], "Sri Crackers")
        self.assertEqual(merged["challan_settings"]["starting_number"], 1001)
